"""
Root pytest configuration for the Django project.

pytest-django reads DJANGO_SETTINGS_MODULE from pyproject.toml; this module
only guarantees the variable is set when tests are started some other way.
Settings overrides and shared fixtures live in app/conftest.py and each app's
tests/conftest.py.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
