"""Shared test fixtures for ddl-schema tests"""

import os

import pytest


CONFIGS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'configs')


MYSQL_USERS_TABLE = """
CREATE TABLE `users` (
  `id` bigint unsigned NOT NULL AUTO_INCREMENT,
  `email` varchar(255) NOT NULL DEFAULT 'guest',
  `score` decimal(10,2) DEFAULT 0.5,
  `created_at` timestamp NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
  `bio` text,
  PRIMARY KEY (`id`),
  UNIQUE KEY `uniq_email` (`email`(10)),
  KEY `idx_score` (`score` DESC, `created_at`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
"""


POSTGRES_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS "public"."items" (
  id serial PRIMARY KEY,
  "name" character varying(64) NOT NULL DEFAULT 'unnamed'::character varying,
  price double precision DEFAULT 0,
  created timestamp with time zone DEFAULT CURRENT_TIMESTAMP
)
"""


@pytest.fixture
def mysql_users_table():
    return MYSQL_USERS_TABLE.strip()


@pytest.fixture
def postgres_items_table():
    return POSTGRES_ITEMS_TABLE.strip()


@pytest.fixture
def config_file():
    def get(name):
        return os.path.join(CONFIGS_DIR, name)
    return get
