from pathlib import Path

# Configuration
DEFAULT_CONFIG_DIR = Path(".flowdeploy")
CONFIG_FILENAME = "config.yml"

# Workflow documents
WORKFLOW_JSON_SUFFIXES = (".json",)
WORKFLOW_YAML_SUFFIXES = (".yaml", ".yml")

# Reference resolution
UNRESOLVED = "UNRESOLVED"

# Script inlining
INLINE_LOCATION = "inline"
SCRIPT_FILE_SUFFIX = ".csx"
MAPPER_FILE_MARKER = "mapper.json"

# Diagnostic types
ERROR_TYPE = "validation"
WARNING_TYPE = "best-practice"
