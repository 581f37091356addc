#!/usr/bin/env python3
"""
Virtual Sequence Generator Base Class
Provides common functionality for managing counter tables used to mint readable ids
"""

from sqlalchemy import text
import threading
from abc import ABC, abstractmethod


class VirtualSequenceGenerator(ABC):
    """
    Abstract base class for sequence generators
    Provides common functionality for managing database sequences
    """

    _lock = threading.Lock()

    @classmethod
    @abstractmethod
    def get_sequence_table_name(cls):
        """
        Abstract method to return the table name for the sequence counter
        Must be implemented by subclasses
        """
        pass

    @classmethod
    def get_next_id(cls, session):
        """
        Get the next available value from the sequence

        Runs inside the caller's transaction: the increment is rolled back
        with it.
        """
        with cls._lock:
            session.execute(text(f"UPDATE {cls.get_sequence_table_name()} SET current_value = current_value + 1"))
            result = session.execute(text(f"SELECT current_value FROM {cls.get_sequence_table_name()}"))
            return result.scalar()

    @classmethod
    def create_sequence_if_not_exists(cls, session):
        """
        Create the counter table if it doesn't exist
        (a single-row table works on SQLite and PostgreSQL alike)
        """
        try:
            session.execute(text(f"""
                CREATE TABLE IF NOT EXISTS {cls.get_sequence_table_name()} (
                    id INTEGER PRIMARY KEY,
                    current_value INTEGER DEFAULT 0
                )
            """))

            # Initialize the counter if it doesn't exist
            result = session.execute(text(f"SELECT COUNT(*) FROM {cls.get_sequence_table_name()}"))
            if result.scalar() == 0:
                session.execute(text(f"INSERT INTO {cls.get_sequence_table_name()} (id, current_value) VALUES (1, 0)"))

            session.commit()

        except Exception:
            session.rollback()
            raise
