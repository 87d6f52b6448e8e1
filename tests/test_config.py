"""Configuration loading and settings tests"""
from test_common import *

import os

from cost_basis.utils.config import (
    API_KEY_ENV_VAR,
    EngineSettings,
    PricingSettings,
    default_config,
    load_config,
)
from cost_basis.utils import constants as C


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config_file = Path(self.tmp.name) / 'configs' / 'config.json'

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_writes_defaults(self):
        config = load_config(self.config_file)
        self.assertEqual(config, default_config())
        self.assertTrue(self.config_file.exists())
        with open(self.config_file) as f:
            self.assertEqual(json.load(f), default_config())

    def test_user_values_merged_over_defaults(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text(json.dumps({'pricing': {'mock_prices': True}}))

        config = load_config(self.config_file)
        self.assertTrue(config['pricing']['mock_prices'])
        self.assertEqual(config['pricing']['default_venue'], 'cccagg')
        self.assertEqual(config['classification']['like_kind_cutoff_year'], 2018)

        with open(self.config_file) as f:
            saved = json.load(f)
        self.assertIn('classification', saved)

    def test_corrupt_file_falls_back_to_defaults(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('{"pricing": ')
        self.assertEqual(load_config(self.config_file), default_config())

    def test_defaults_are_fresh_copies(self):
        a = default_config()
        a['pricing']['mock_prices'] = True
        self.assertFalse(default_config()['pricing']['mock_prices'])


class TestSettings(unittest.TestCase):
    def test_engine_settings_defaults(self):
        settings = EngineSettings.from_config(default_config())
        self.assertEqual(settings, EngineSettings())
        self.assertEqual(settings.match_tolerance, D('0.02'))
        self.assertEqual(settings.usd_sale_max_amount, D('4'))
        self.assertEqual(settings.usd_sale_exchange, 'Coinbase')
        self.assertEqual(settings.airdrop_symbols, frozenset(C.DEFAULT_AIRDROP_SYMBOLS))

    def test_engine_settings_from_user_values(self):
        config = default_config()
        config['classification']['airdrop_symbols'] = ['BCH', 'BTG']
        config['classification']['match_tolerance'] = '0.5'
        config['pricing']['usd_sale_venue'] = 'gdax'
        settings = EngineSettings.from_config(config)
        self.assertEqual(settings.airdrop_symbols, frozenset({'BCH', 'BTG'}))
        self.assertEqual(settings.match_tolerance, D('0.5'))
        self.assertEqual(settings.usd_sale_venue, 'gdax')

    def test_api_key_from_environment(self):
        with patch.dict(os.environ, {API_KEY_ENV_VAR: 'env-key'}):
            self.assertEqual(PricingSettings.from_config(default_config()).api_key, 'env-key')
            config = default_config()
            config['pricing']['api_key'] = 'file-key'
            self.assertEqual(PricingSettings.from_config(config).api_key, 'file-key')

    def test_pricing_settings_coerce_types(self):
        config = default_config()
        config['pricing']['retry_attempts'] = '5'
        settings = PricingSettings.from_config(config)
        self.assertEqual(settings.retry_attempts, 5)
        self.assertIsInstance(settings.timeout_seconds, float)


if __name__ == '__main__':
    unittest.main()
