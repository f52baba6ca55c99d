from quizcore.config import EconomyConfig
from quizcore.economy import EntryStatus, RewardService


def test_entry_charges_cost(ctx):
    ctx.ledger.set_coins(12)

    result = ctx.gate.try_enter("general", 1)

    assert result.allowed
    assert result.status is EntryStatus.OK
    assert ctx.ledger.get_coins() == 12 - ctx.config.economy.level_entry_cost


def test_check_does_not_charge(ctx):
    ctx.ledger.set_coins(12)
    assert ctx.gate.check("general", 1).allowed
    assert ctx.ledger.get_coins() == 12


def test_entry_refused_when_locked(ctx):
    ctx.ledger.set_coins(50)
    result = ctx.gate.try_enter("general", 2)
    assert result.status is EntryStatus.LOCKED
    assert ctx.ledger.get_coins() == 50


def test_entry_refused_without_content(ctx):
    ctx.ledger.set_coins(50)
    assert ctx.gate.try_enter("empty", 1).status is EntryStatus.NO_CONTENT
    assert ctx.gate.try_enter("nope", 1).status is EntryStatus.NO_CONTENT
    assert ctx.ledger.get_coins() == 50


def test_entry_refused_when_broke(ctx):
    ctx.ledger.set_coins(2)
    result = ctx.gate.try_enter("general", 1)
    assert result.status is EntryStatus.INSUFFICIENT_COINS
    assert result.missing == ctx.config.economy.level_entry_cost - 2
    assert ctx.ledger.get_coins() == 2


def test_ad_reward_only_on_success(ctx):
    rewards = ctx.rewards
    assert rewards.grant_ad_reward(False) == 0
    assert ctx.ledger.get_coins() == 0
    assert rewards.grant_ad_reward(True) == ctx.config.economy.ad_coins_reward
    assert ctx.ledger.get_coins() == ctx.config.economy.ad_coins_reward


def test_ad_reward_cooldown(ctx):
    now = [1000.0]
    rewards = RewardService(ctx.ledger, EconomyConfig(ad_retry_cooldown_seconds=60), clock=lambda: now[0])

    assert rewards.grant_ad_reward(True) == 20
    now[0] += 30
    assert not rewards.ad_reward_available()
    assert rewards.grant_ad_reward(True) == 0
    now[0] += 30
    assert rewards.grant_ad_reward(True) == 20
    assert ctx.ledger.get_coins() == 40


def test_purchase_pack(ctx):
    assert ctx.rewards.purchase_pack("medium") == 300
    assert ctx.rewards.purchase_pack("gigantic") == 0
    assert ctx.ledger.get_coins() == 300
