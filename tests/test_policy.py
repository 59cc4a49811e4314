"""Tests for the allow-list policy."""

from __future__ import annotations

import logging

import pytest

from lightsync.config import DeviceManagementConfig
from lightsync.core import AllowListPolicy

IDS = ["A1", "B2", "C3"]


@pytest.mark.parametrize("unique_id", IDS + ["Z9", ""])
def test_no_configuration_allows_everything(unique_id):
    assert AllowListPolicy().is_allowed(unique_id)
    assert AllowListPolicy(unique_ids=["A1"]).is_allowed(unique_id)
    assert AllowListPolicy(mode="blacklist").is_allowed(unique_id)


def test_blacklist_rejects_only_listed_ids():
    policy = AllowListPolicy(["A1", "B2"], "blacklist")

    assert not policy.is_allowed("A1")
    assert not policy.is_allowed("B2")
    assert policy.is_allowed("C3")


def test_whitelist_rejects_only_unlisted_ids():
    policy = AllowListPolicy(["A1", "B2"], "whitelist")

    assert policy.is_allowed("A1")
    assert policy.is_allowed("B2")
    assert not policy.is_allowed("C3")


def test_mode_naming_both_rejects_everything():
    policy = AllowListPolicy(["A1"], "blacklist+whitelist")

    assert not policy.is_allowed("A1")
    assert not policy.is_allowed("B2")


def test_unknown_mode_allows_everything():
    policy = AllowListPolicy(["A1"], "allow")

    assert policy.is_allowed("A1")
    assert policy.is_allowed("B2")


def test_malformed_configuration_fails_open(caplog):
    policy = AllowListPolicy(unique_ids=42, mode="blacklist")  # type: ignore[arg-type]

    with caplog.at_level(logging.DEBUG, logger="lightsync.core.policy"):
        assert policy.is_allowed("A1")

    assert any(record.levelno == logging.DEBUG for record in caplog.records)


def test_from_config():
    config = DeviceManagementConfig(
        blacklisted_unique_ids=["A1"], blacklist_or_whitelist="whitelist"
    )
    policy = AllowListPolicy.from_config(config)

    assert policy.is_allowed("A1")
    assert not policy.is_allowed("B2")
