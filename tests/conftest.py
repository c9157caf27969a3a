"""Pytest configuration and fixtures for xapi stub generator tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from xapi_stub_generator.nodes import Generic, Member, Root

# Test directory structure
TESTS_DIR = Path(__file__).parent
SCHEMAS_DIR = TESTS_DIR / "schemas"


@pytest.fixture
def root():
    """An empty document."""
    return Root()


@pytest.fixture
def expected_command_root():
    """A document with a main class and an empty command tree, as built by the parser."""
    root = Root()
    main = root.add_main()
    command_tree = root.add_interface("CommandTree")
    main.add_child(Member("Command", command_tree))
    return root


@pytest.fixture
def expected_config_root():
    """A document with a main class and an empty config tree, as built by the parser."""
    root = Root()
    main = root.add_main()
    root.add_generic_interfaces()
    config_tree = root.add_interface("ConfigTree")
    main.add_child(Member("Config", Generic("Configify", config_tree)))
    return root


@pytest.fixture
def expected_status_root():
    """A document with a main class and an empty status tree, as built by the parser."""
    root = Root()
    main = root.add_main()
    root.add_generic_interfaces()
    status_tree = root.add_interface("StatusTree")
    main.add_child(Member("Status", Generic("Statusify", status_tree)))
    return root


@pytest.fixture
def display_command_schema():
    """A command schema with a nested command taking optional and required parameters."""
    return {
        "Command": {
            "Message": {
                "Alert": {
                    "Display": {
                        "command": "True",
                        "description": "Display a message on screen.",
                        "Duration": {
                            "required": "False",
                            "ValueSpace": {"type": "Integer", "min": "0", "max": "3600"},
                        },
                        "Text": {
                            "required": "True",
                            "ValueSpace": {"type": "String", "minLength": "0", "maxLength": "255"},
                        },
                        "Level": {
                            "required": "False",
                            "ValueSpace": {"type": "Literal", "Value": ["Info", "Warning", "Error"]},
                        },
                    },
                },
            },
        },
    }


@pytest.fixture
def hdmi_config_schema():
    """A configuration schema with a keyed collection of two inputs."""
    mode = {
        "access": "public-api",
        "role": "Admin;Integrator",
        "read": "Admin;Integrator;User",
        "ValueSpace": {"type": "Literal", "default": "On", "Value": ["Off", "On"]},
    }
    return {
        "Configuration": {
            "Audio": {
                "Input": {
                    "HDMI": [
                        {"id": "2", "Mode": dict(mode)},
                        {"id": "3", "Mode": dict(mode)},
                    ],
                },
            },
        },
    }


@pytest.fixture
def codec_schema_path():
    """Path to a small schema file covering all three families."""
    return SCHEMAS_DIR / "codec.json"


@pytest.fixture
def codec_yaml_schema_path():
    """Path to the YAML version of the codec schema."""
    return SCHEMAS_DIR / "codec.yaml"
