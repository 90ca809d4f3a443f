"""Top-level pytest configuration.

``pytest_plugins`` has to be declared in the top-level conftest to affect the
whole suite.
"""

pytest_plugins = ("mockledger.pytest_plugin",)
