#!/usr/bin/env python3
"""
sharemount configuration database

A simple per-user key/value store using SQLite. Passwords are never stored
here, they are asked for on every run.
"""

import os
import sqlite3
import logging
from contextlib import closing, contextmanager

logger = logging.getLogger(__name__)


def default_db_path():
    """Location of the configuration database, honouring SHAREMOUNT_CONFIG_DB and XDG_CONFIG_HOME"""
    override = os.environ.get("SHAREMOUNT_CONFIG_DB")
    if override:
        return override
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(config_home, "sharemount", "config.sqlite")


class ConfigDB:
    """
    A class to manage key/value pairs in a SQLite database
    """

    def __init__(self, db_path=None):
        """
        Open the database, creating it if needed

        Args:
            db_path: Path to the SQLite database file (default: see default_db_path())
        """
        self.db_path = db_path or default_db_path()
        self._ensure_db_exists()

    @contextmanager
    def _connect(self):
        with closing(sqlite3.connect(self.db_path)) as conn:
            with conn:
                yield conn

    def _ensure_db_exists(self):
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with self._connect() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS config (
                    key TEXT PRIMARY KEY,
                    value TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    modified_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

    def get(self, key, default=None):
        """
        Get a value from the database

        Args:
            key: The key to retrieve
            default: Value to return if key doesn't exist

        Returns:
            The value for the key or default if not found
        """
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM config WHERE key = ?", (key,)).fetchone()
        return row[0] if row else default

    def set(self, key, value):
        """Store a key/value pair, leaving the row untouched if the value did not change"""
        current_value = self.get(key)
        if current_value == value:
            logger.debug(f"Value for {key} is already '{value}', skipping update")
            return

        with self._connect() as conn:
            conn.execute('''
                INSERT OR REPLACE INTO config (key, value, modified_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
            ''', (key, value))

        if current_value is not None:
            logger.debug(f"Updated key {key} from '{current_value}' to '{value}'")
        else:
            logger.debug(f"Created new key {key} with value '{value}'")

    def delete(self, key):
        with self._connect() as conn:
            conn.execute("DELETE FROM config WHERE key = ?", (key,))

    def list_keys(self, prefix=None):
        """
        List all keys in the database, optionally filtered by prefix

        Args:
            prefix: Optional prefix to filter keys

        Returns:
            Sorted list of keys
        """
        return sorted(self.get_all(prefix))

    def get_all(self, prefix=None):
        """
        Get all key/value pairs, optionally filtered by prefix

        Args:
            prefix: Optional prefix to filter keys

        Returns:
            Dictionary of key/value pairs
        """
        with self._connect() as conn:
            if prefix:
                rows = conn.execute("SELECT key, value FROM config WHERE substr(key, 1, ?) = ?",
                                    (len(prefix), prefix)).fetchall()
            else:
                rows = conn.execute("SELECT key, value FROM config").fetchall()
        return {key: value for key, value in rows}
