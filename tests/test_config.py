"""Test engine configuration."""
import dataclasses

import pytest

from storefront.config import EngineConfig
from verticals.pizzeria.config import config as pizzeria_config


def test_default_config():
    config = EngineConfig.default()
    assert config.availability.additional_unit_lead_time == 5
    assert config.availability.default_time_step == 15
    assert config.naming.split_separator == " | "
    assert config.naming.empty_split_placeholder == "∅"


def test_config_is_frozen():
    config = EngineConfig.default()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.naming = None


def test_from_env(monkeypatch):
    monkeypatch.setenv("STOREFRONT_ADDITIONAL_UNIT_LEAD_TIME", "10")
    monkeypatch.setenv("STOREFRONT_DEFAULT_TIME_STEP", "30")
    config = EngineConfig.from_env()
    assert config.availability.additional_unit_lead_time == 10
    assert config.availability.default_time_step == 30


def test_from_env_custom_prefix(monkeypatch):
    monkeypatch.setenv("PIZZA_ADDITIONAL_UNIT_LEAD_TIME", "7")
    config = EngineConfig.from_env(prefix="PIZZA_")
    assert config.availability.additional_unit_lead_time == 7
    assert config.availability.default_time_step == 15


def test_pizzeria_config():
    assert pizzeria_config.availability.additional_unit_lead_time == 5
