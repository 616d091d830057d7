"""
ddl_schema configuration

Settings are read from a YAML file:

    mode: postgres          # mysql (default) or postgres
    log_level: debug        # critical, error, warning, info (default), debug
    output_format: json     # yaml (default) or json

Every key is optional; unknown keys are rejected.
"""

import yaml

from .models import GeneratorMode


def stype(obj):
    return type(obj).__name__


class Settings:
    DEFAULT_MODE = 'mysql'
    DEFAULT_LOG_LEVEL = 'info'
    DEFAULT_OUTPUT_FORMAT = 'yaml'

    LOG_LEVELS = ['critical', 'error', 'warning', 'info', 'debug']
    OUTPUT_FORMATS = ['yaml', 'json']

    def __init__(self):
        self.settings_file = ''
        self.mode = Settings.DEFAULT_MODE
        self.log_level = Settings.DEFAULT_LOG_LEVEL
        self.debug_log_level = False
        self.output_format = Settings.DEFAULT_OUTPUT_FORMAT

    def load(self, settings_file):
        with open(settings_file, 'r') as f:
            data = yaml.safe_load(f.read()) or {}

        if not isinstance(data, dict):
            raise ValueError(f'settings file should contain a mapping and not {stype(data)}')

        self.settings_file = settings_file
        self.mode = data.pop('mode', Settings.DEFAULT_MODE)
        self.log_level = data.pop('log_level', Settings.DEFAULT_LOG_LEVEL)
        self.output_format = data.pop('output_format', Settings.DEFAULT_OUTPUT_FORMAT)
        if data:
            raise Exception(f'Unsupported config options: {list(data.keys())}')
        self.validate()

    @property
    def generator_mode(self) -> GeneratorMode:
        return GeneratorMode(self.mode)

    def validate_mode(self):
        if not isinstance(self.mode, str):
            raise ValueError(f'mode should be string and not {stype(self.mode)}')
        modes = [mode.value for mode in GeneratorMode]
        if self.mode not in modes:
            raise ValueError(f'wrong mode {self.mode}, should be one of {modes}')

    def validate_log_level(self):
        if self.log_level not in Settings.LOG_LEVELS:
            raise ValueError(f'wrong log level {self.log_level}')
        self.debug_log_level = self.log_level == 'debug'

    def validate_output_format(self):
        if self.output_format not in Settings.OUTPUT_FORMATS:
            raise ValueError(f'wrong output format {self.output_format}')

    def validate(self):
        self.validate_mode()
        self.validate_log_level()
        self.validate_output_format()
