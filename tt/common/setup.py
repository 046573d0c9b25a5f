from pathlib import Path
from dataclasses import dataclass

from platformdirs import user_data_dir, user_log_dir

APP_NAME = "TalkTimer"
APP_AUTHOR = "talktimer"

# Lil helper function to create missing directories.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    current: Path

    @staticmethod
    def build():
        # Folder for all talktimer user-specific stuff, and the per-user log folder the platform expects
        data = ensure_directory(Path(user_data_dir(appname=APP_NAME, appauthor=APP_AUTHOR)))
        logs = ensure_directory(Path(user_log_dir(appname=APP_NAME, appauthor=APP_AUTHOR)))

        # Folders within the data folder
        current = ensure_directory(data / "current")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()
