"""Transform pipeline orchestration."""

from .models import Chunk, SourceModule, TransformResult
from .orchestrator import BuildPipeline, build_pipeline, shift_source_map
from .replace import EnvSubstitution
from .shebang import ShebangStore, split_shebang

__all__ = [
    "BuildPipeline",
    "Chunk",
    "EnvSubstitution",
    "ShebangStore",
    "SourceModule",
    "TransformResult",
    "build_pipeline",
    "shift_source_map",
    "split_shebang",
]
