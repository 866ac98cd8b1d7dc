"""
Test configuration and fixtures
"""
import pytest
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.entity import Entity


class Person(Entity):
    """Entity model used across the tests"""

    def __init__(self, name=None, city=None, age=None, address=None, tags=None):
        self.name = name
        self.city = city
        self.age = age
        self.address = address
        self.tags = tags
        self.init_calls = 0

    def on_init(self):
        self.init_calls += 1

    def __repr__(self):
        return f"Person({self.name!r})"


@pytest.fixture
def person_model():
    return Person


@pytest.fixture
def people_records():
    """Raw records, as they would come out of a JSON payload"""
    return [
        {"name": "José Álvarez", "city": "Madrid", "age": 34, "address": {"city": "Madrid", "zip": "28001"}},
        {"name": "Ana Müller", "city": "Berlin", "age": 28, "address": {"city": "Berlin", "zip": "10115"}},
        {"name": "Jose Pereira", "city": "Lisboa", "age": 41, "address": {"city": "Lisboa", "zip": "1100"}},
        {"name": "Chloé Martin", "city": "Paris", "age": 28, "address": None},
        {"name": "Björn Berg", "city": "Stockholm", "age": 0, "address": {"city": "Stockholm"}},
    ]


@pytest.fixture
def make_records():
    """Factory for n numbered raw records"""
    def _make(count):
        return [{"name": f"Person {i}", "city": "Town", "age": i} for i in range(1, count + 1)]
    return _make
