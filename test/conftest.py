"""
Test configuration for inc pipeline tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_parser
from semantics import create_analyzer
from interpreter import create_interpreter


@pytest.fixture
def pipeline():
  """Provide a fresh parser, analyzer and interpreter collecting output lines"""
  lines = []
  return create_parser(), create_analyzer(), create_interpreter(emit=lines.append), lines
