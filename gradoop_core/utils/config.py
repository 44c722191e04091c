from dataclasses import dataclass
import os

@dataclass(frozen=True)
class Settings:
    default_graph_label: str = os.getenv("GRADOOP_DEFAULT_GRAPH_LABEL", "_default")
    default_vertex_label: str = os.getenv("GRADOOP_DEFAULT_VERTEX_LABEL", "_default")
    default_edge_label: str = os.getenv("GRADOOP_DEFAULT_EDGE_LABEL", "_default")
    log_level: str = os.getenv("GRADOOP_LOG_LEVEL", "INFO")
    log_file: str = os.getenv("GRADOOP_LOG_FILE", "")

SETTINGS = Settings()
