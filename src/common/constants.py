"""Shared constants for qa-kit.

For environment-based configuration (API key, model, etc.), use the env module:
    from common.env import env
    api_key = env.openai_api_key()
"""

# Files and directories looked up relative to the repository root
CONFIG_FILENAME = "qa.json"
QUALITY_DIRNAME = "quality"

# Minimum oracle relevance score (0-100) for a snippet to be adjudicated
RELEVANCE_THRESHOLD = 80

# Line appended to a diff cut down to the configured maximum
TRUNCATION_MARKER = "... (truncated)"

# Commentary used when the oracle's adjudication reply has no usable JSON object
UNPARSABLE_ANALYSIS = "Unable to parse analysis"
