"""Tests for settings.yaml loading."""

import pytest

from subscription_backend.config.loader import (
    ConfigValidationError,
    get_code_policy,
    get_pro_entitlement_key,
    get_referral_policy,
    get_sweep_schedule,
    load_app_config,
)
from subscription_backend.models.util_types import CodePolicy, ReferralPolicy


def write_config(tmp_path, text: str) -> str:
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_default_settings_match_policy_defaults():
    assert get_referral_policy() == ReferralPolicy()
    assert get_code_policy() == CodePolicy()
    assert get_sweep_schedule() == {"schedule": "0 3 * * *", "timezone": "UTC"}
    assert get_pro_entitlement_key() == "pro"


def test_empty_file_uses_defaults(tmp_path):
    config = load_app_config(write_config(tmp_path, ""))

    assert config == {}
    assert get_referral_policy(config) == ReferralPolicy()


def test_overrides_are_applied(tmp_path):
    config = load_app_config(write_config(tmp_path, """
referral:
  reward_threshold: 5
  trial_days: 14
referral_code:
  length: 6
"""))

    policy = get_referral_policy(config)
    assert policy.reward_threshold == 5
    assert policy.trial_days == 14
    assert policy.reward_days == 7
    assert get_code_policy(config).length == 6


@pytest.mark.parametrize("text", [
    "referral:\n  reward_threshold: 0\n",
    "referral:\n  max_rewards: -1\n",
    "referral_code:\n  alphabet: abc\n",
    "expiry_sweep:\n  schedule: daily\n",
    "entitlements:\n  pro_key: ''\n",
    "- just\n- a list\n",
])
def test_invalid_settings_are_rejected(tmp_path, text):
    with pytest.raises(ConfigValidationError):
        load_app_config(write_config(tmp_path, text))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "missing.yaml"))
