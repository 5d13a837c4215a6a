from .api import (
    diff_files,
    load_viewer_config,
    dump_viewer_config,
)
from .constants import DiffStatus, DiffSide, ROOT_KEY
from .diff.differ import CyclicInputError, DiffRecord, diff_json, flatten, stringify, summarize
from .model.viewer import ViewerConfig, ViewerTheme

__all__ = [
    "__version__",
    "diff_json",
    "diff_files",
    "flatten",
    "stringify",
    "summarize",
    "load_viewer_config",
    "dump_viewer_config",
    "DiffRecord",
    "DiffStatus",
    "DiffSide",
    "ROOT_KEY",
    "CyclicInputError",
    "ViewerConfig",
    "ViewerTheme",
]

__version__ = "0.1.0"
