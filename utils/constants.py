import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
DEFAULT_TEAM_COLOR = _constants["DEFAULT_TEAM_COLOR"]
ASSIGNMENT_ID_PREFIX = _constants["ASSIGNMENT_ID_PREFIX"]
TEAM_ID_PREFIX = _constants["TEAM_ID_PREFIX"]
CREW_TEAM_ID_PREFIX = _constants["CREW_TEAM_ID_PREFIX"]
DEFAULT_RESOURCE_ROLE = _constants["DEFAULT_RESOURCE_ROLE"]

MOCK_RESOURCES = _constants["MOCK_RESOURCES"]
MOCK_TEAMS = _constants["MOCK_TEAMS"]
MOCK_ASSIGNMENTS = _constants["MOCK_ASSIGNMENTS"]
