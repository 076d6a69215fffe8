import logging

import pytest

from famfinance import config
from famfinance.models import DEFAULT_BUDGET_RULE


def test_budget_rule_settings_match_defaults() -> None:
    assert config.load_budget_rule() == DEFAULT_BUDGET_RULE


def test_budget_group_labels() -> None:
    assert config.budget_group_labels() == {
        'essentials': 'Essenciais',
        'lifestyle': 'Estilo de vida',
        'investments': 'Investimentos',
    }


def test_load_config_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        config.load_config('does_not_exist')


def test_get_config_value() -> None:
    assert config.get_config_value('dashboard', 'projection', 'months') == 120
    assert config.get_config_value('dashboard', 'projection', 'missing', default=7) == 7
    assert config.get_config_value('does_not_exist', 'x', default='fallback') == 'fallback'


def test_configure_logging_falls_back_to_info(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

    config.configure_logging('debug')
    config.configure_logging('nonsense')

    assert calls[0]['level'] == logging.DEBUG
    assert calls[1]['level'] == logging.INFO
    assert calls[0]['format'] == config.LOG_FORMAT
