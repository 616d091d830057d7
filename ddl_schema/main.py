#!/usr/bin/env python3

import argparse
import json
import logging
import sys

import yaml

from .config import Settings
from .parser import parse_ddls


logger = logging.getLogger(__name__)


def set_logging_config(tags, log_level_str=None):
    """Configure logging to output only to stderr, stdout carries the parsed schema."""
    handlers = [logging.StreamHandler(sys.stderr)]

    log_levels = {
        'critical': logging.CRITICAL,
        'error': logging.ERROR,
        'warning': logging.WARNING,
        'info': logging.INFO,
        'debug': logging.DEBUG,
    }

    log_level = log_levels.get(log_level_str)
    if log_level is None:
        logging.warning(f'Unknown log level {log_level_str}, setting info')
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=f'[{tags} %(asctime)s %(levelname)8s] %(message)s',
        handlers=handlers,
    )


def dump_ddls(ddls, output_format):
    data = [ddl.to_dict() for ddl in ddls]
    if output_format == 'json':
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def process_file(file_name, config: Settings):
    with open(file_name, 'r', encoding='utf-8') as f:
        sql = f.read()

    result = parse_ddls(config.generator_mode, sql)
    logger.info(f'{file_name}: parsed {len(result.ddls)} statements')
    if config.debug_log_level:
        for ddl in result.ddls:
            logger.debug(f'{file_name}: {ddl.to_dict()["kind"]}: {ddl.statement}')
    print(dump_ddls(result.ddls, config.output_format))

    if not result.ok:
        logger.error(
            f'{file_name}: stopped after {len(result.ddls)} statements, '
            f'{type(result.error).__name__}: {result.error}'
        )
    return result.ok


def main(argv=None):
    parser = argparse.ArgumentParser(description='Parse SQL schema statements into a schema model')
    parser.add_argument('files', help='SQL files with `;`-separated DDL statements', nargs='+')
    parser.add_argument('--config', help='config file path', default=None, type=str)
    parser.add_argument('--mode', help='SQL dialect', type=str, choices=['mysql', 'postgres'])
    parser.add_argument('--format', help='output format', dest='output_format', type=str, choices=Settings.OUTPUT_FORMATS)
    parser.add_argument('--log-level', help='log level', type=str, choices=Settings.LOG_LEVELS)
    args = parser.parse_args(argv)

    config = Settings()
    if args.config:
        config.load(args.config)
    if args.mode:
        config.mode = args.mode
    if args.output_format:
        config.output_format = args.output_format
    if args.log_level:
        config.log_level = args.log_level
    config.validate()

    set_logging_config('ddl_schema', log_level_str=config.log_level)

    ok = True
    for file_name in args.files:
        if not process_file(file_name, config):
            ok = False
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
