"""Shared constants used by the title guard entrypoints."""

from __future__ import annotations

# Environment variables exported by the CI runner
EVENT_PATH_ENV = "GITHUB_EVENT_PATH"
OUTPUT_PATH_ENV = "GITHUB_OUTPUT"

# Action inputs are exported as INPUT_<NAME>
INPUT_ENV_PREFIX = "INPUT_"

ALLOWED_TYPES_INPUT = "allowed-types"
REQUIRE_SCOPE_INPUT = "require-scope"
ALLOW_DRAFT_INPUT = "allow-draft"

NORMALIZED_TITLE_OUTPUT = "normalized-title"

EXIT_OK = 0
EXIT_FAILURE = 1
