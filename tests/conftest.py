"""Pytest configuration and shared fixtures for the mdmindmap test suite.

This module provides shared fixtures, test configuration, and the markdown
documents reused across unit, integration and performance tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdmindmap import TreeNode

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "performance: Timing tests with soft performance targets")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a document mixing every block type the builder recognizes.

    Returns
    -------
    str
        Markdown with nested headers, lists, code, a table and inline content.

    """
    return """# Project Documentation

This project contains several important components.

## Database Schema
The database consists of multiple tables:

| Table | Columns | Purpose |
|-------|---------|---------|
| users | id, name, email | User management |
| posts | id, title, content | Content storage |

## Code Examples

```javascript
function connectDB() {
  return mongoose.connect(url);
}
```

## Task List
- Design the schema
- Write the API
- Deploy to production

### Notes
The formula $E = mc^2$ is unrelated.
See [the docs](https://example.com/docs) for more.
"""


@pytest.fixture
def chapter_markdown() -> str:
    """Provide the nested chapter document used by the filtering scenarios.

    Returns
    -------
    str
        Two chapters with sections, text lines and list items.

    """
    return """# Chapter 1
this is crazy
- Item 1
- Item 2
- Item 3

## Section 1.1
this is crazy

### Subsection 1.1.1
this is crazy

### Subsection 1.1.2
this is crazy

## Section 1.2
this is crazy
- Item 1.2.1
- Item 1.2.2
- Item 1.2.3

# Chapter 2
Final words
"""


@pytest.fixture
def leaf_tree():
    """Provide a root with one level-1 header whose detail can be set by the test.

    Returns
    -------
    tuple of (TreeNode, TreeNode)
        The root and its single header child.

    """
    root = TreeNode("Root", 0)
    header = TreeNode("Section", 1, "header")
    header.type = "header"
    root.add_child(header)
    return root, header
