"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# The template modules live flat under app/ and import each other by name.
app_root = Path(__file__).resolve().parents[1] / "app"
if str(app_root) not in sys.path:
  sys.path.insert(0, str(app_root))

import app


def fixed_token(nbytes):
  return "ab" * nbytes


@pytest.fixture
def template():
  """A template built with a fixed deployment name."""
  return app.build(token=fixed_token)


@pytest.fixture
def resources(template):
  return template["Resources"]
