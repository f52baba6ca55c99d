from .catalog import ContentCatalog
from .loader import catalog_from_dicts, load_bank_file, load_catalog_dir, parse_bank, validate_bank_dict
from .models import Category, Flat, Level, Leveled, LevelSource, Question, normalize_levels

__all__ = [
    "ContentCatalog",
    "Category",
    "Level",
    "Question",
    "Leveled",
    "Flat",
    "LevelSource",
    "normalize_levels",
    "parse_bank",
    "load_bank_file",
    "load_catalog_dir",
    "catalog_from_dicts",
    "validate_bank_dict",
]
