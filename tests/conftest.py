"""Shared fixtures: a testing app on in-memory SQLite and a stored source word."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path so we can import the app
sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from models import db
from models.enums import LanguageCode
from tests.payloads import create_source_word


@pytest.fixture
def app():
    """Create and configure a test app"""
    app = create_app('testing')
    app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
    app.config['TESTING'] = True

    with app.app_context():
        db.create_all()

        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hund(app):
    """Danish source word "hund" with two definitions of one example each."""
    return create_source_word(
        'hund',
        LanguageCode.da,
        [
            ('firbenet pattedyr der holdes som husdyr', ['hunden gøede']),
            ('nedsættende om en person', ['din dumme hund']),
        ],
        phonetic='[ˈhunˀ]'
    )
