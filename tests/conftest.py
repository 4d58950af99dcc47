"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mdexercises.config import Settings  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Settings with defaults only (no environment or .env lookups)."""
    return Settings(_env_file=None)


@pytest.fixture
def log_messages():
    """Capture loguru WARNING+ messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")

    yield messages

    logger.remove(handler_id)


@pytest.fixture
def code_exercise_md():
    """Provide a complete code exercise document."""
    return """# Exercise: Hello World

::: exercise
id: hello-world
difficulty: beginner
time: 10 minutes
prerequisites:
  - variables
  - functions
:::

Write a function that greets someone by name.

::: objectives
thinking:
  - Understand string formatting
doing:
  - Implement a greeting function
:::

::: discussion
- Why return a String instead of printing?
- What does `&str` borrow?
:::

::: starter file="src/main.rs"
```rust
fn greet(name: &str) -> String {
    todo!()
}
```
:::

::: hint level=1 title="Formatting"
Use the `format!` macro.
:::

::: hint level=2
```rust
format!("Hello, {}!", name)
```
:::

::: solution reveal=always
```rust
fn greet(name: &str) -> String {
    format!("Hello, {}!", name)
}
```

### Explanation

`format!` builds a new String.
:::

::: tests mode=local
```rust
#[test]
fn greets() {
    assert_eq!(greet("Ada"), "Hello, Ada!");
}
```
:::

::: reflection
1. What other ways could you build the string?
:::
"""


@pytest.fixture
def usecase_exercise_md():
    """Provide a complete use-case exercise document."""
    return """# Threat Model: Patient Portal

::: usecase
id: uc-patient-portal
domain: healthcare
difficulty: intermediate
time: 1 hour
:::

::: scenario
organization: Acme Health
industry: Healthcare
stakeholders:
  - CISO
  - Patients
constraints:
  - HIPAA
Acme Health is launching a patient portal.

It stores lab results.
:::

::: prompt
aspects:
  - Authentication
  - Data at rest
Identify the three biggest risks and how to mitigate them.
:::

::: hint level=1
Think about who can see lab results.
:::

::: evaluation
criteria:
  - name: Threat identification
    weight: 60
    description: Names realistic threats
  - name: Mitigations
    weight: 40
key_points:
  - Patient data exposure
  - Account takeover
min_words: 150
max_words: 600
pass_threshold: 0.7
:::

::: sample-answer reveal=never
expected_score: 0.9
The main risks are credential stuffing, insecure storage and over-broad access.
:::

::: context
HIPAA requires access controls on protected health information.
:::
"""
