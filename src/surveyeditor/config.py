"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (grid origin, spacing, precision)
   from being scattered throughout the model and the views.
2. Persistence: It names the QSettings keys and file filters shared by the
   main window dialogs.

Exports:
    DEFAULT_POINT_COUNT (int): Size of a generated batch when none is given.
    DISPLAY_PRECISION (int): Decimal places used to render coordinates.
"""

# Synthetic coordinate grid (local plane rectangular coordinates, metres)
ORIGIN_X: float = 45000.0
ORIGIN_Y: float = -12000.0
GRID_COLUMNS: int = 50
GRID_SPACING: float = 10.0
XY_JITTER: float = 5.0
Z_BASE: float = 10.0
Z_RANGE: float = 10.0

COORDINATE_DECIMALS: int = 3
DEFAULT_POINT_COUNT: int = 1000
MAX_POINT_COUNT: int = 100000

# Cell rendering/editing
DISPLAY_PRECISION: int = 3
EDIT_DECIMALS: int = 6
EDIT_RANGE: float = 1e9

# File dialogs
SIM_FILE_FILTER: str = "SIM files (*.sim);;Text files (*.txt);;All files (*)"
PROJECT_FILE_FILTER: str = "Survey projects (*.h5);;All files (*)"

# QSettings keys
SETTINGS_LAST_DIR: str = "paths/last_dir"
