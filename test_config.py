import pytest

from codon_redundancy import config


def test_load_config_returns_copy():
    opts = config.load_config()
    assert opts == config.DEFAULT_CONFIG
    opts['genetic_code'] = 2
    assert config.load_config()['genetic_code'] == 'standard'


def test_load_preset():
    preset = config.load_preset('{"genetic_code": 2, "float_format": "%.3f"}')
    assert preset == {'genetic_code': 2, 'float_format': '%.3f'}


@pytest.mark.parametrize('text', [
    '[1, 2]', '"standard"', '{"codon_table": 2}', '{not json',
    '{"table_cache_size": null}', '{"table_cache_size": 0}', '{"table_cache_size": true}',
    '{"table_cache_size": "8"}', '{"float_format": 3}', '{"genetic_code": null}',
    '{"genetic_code": 1.5}',
])
def test_invalid_preset(text):
    with pytest.raises(ValueError):
        config.load_preset(text)


def test_preset_values_accepted():
    preset = config.load_preset('{"table_cache_size": 4, "genetic_code": "SGC1"}')
    assert preset == {'table_cache_size': 4, 'genetic_code': 'SGC1'}
