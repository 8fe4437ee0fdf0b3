"""Shared constants for entrygen.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

# =============================================================================
# Project Layout
# =============================================================================

# Project config file, relative to the project dir
CONFIG_FILE_NAME = "entrygen.yaml"

# Generated files live in <project>/.entrygen/<app>/<env> unless overridden
TEMP_DIR_NAME = ".entrygen"

# Component files are <project>/src/**/*.vue
COMPONENT_EXTENSION = "vue"

# Generated entries are <temp>/<kind>-entry.js
ENTRY_EXTENSION = "js"

# =============================================================================
# App Settings
# =============================================================================

APP_TYPE_WEB = "web"
APP_TYPES = ("web", "mobile", "desktop")

ENV_DEV = "dev"
ENVIRONMENTS = ("dev", "test", "prod")

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080

# Always passed to the backend entry in addition to `custom`
NETWORK_CONFIG_KEYS = ("host", "port", "backendPort")

# =============================================================================
# Entries
# =============================================================================

ENTRY_FRONTEND = "frontend"
ENTRY_BACKEND = "backend"

# First write of a process is backdated to avoid a dev-server watch race
INITIAL_ENTRY_BACKDATE_SECONDS = 100
