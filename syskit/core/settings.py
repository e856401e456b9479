import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Union

import yaml
from dotenv import load_dotenv

# Load env vars if present
load_dotenv()


# --- DATACLASSES (SCHEMA) ---

@dataclass
class GitSettings:
    """Where repositories are cloned from and which branch is pulled."""
    host: str = "github.com"
    # Empty: falls back to `git config --global user.name`
    account: str = ""
    branch: str = "master"


@dataclass
class FileSettings:
    default_permissions: str = "755"


@dataclass
class AppSettings:
    """Root configuration object."""
    git: GitSettings = field(default_factory=GitSettings)
    files: FileSettings = field(default_factory=FileSettings)
    inventory_file: str = "inventory/hosts.yaml"
    log_file: Optional[str] = None
    environment: str = "dev"


# --- LOADER LOGIC ---

class _SettingsLoader(yaml.SafeLoader):
    """SafeLoader that keeps octal literals (0755, 0o755) as their digits."""


def _construct_int(loader: yaml.SafeLoader, node: yaml.ScalarNode):
    text = loader.construct_scalar(node).replace("_", "")
    if re.fullmatch(r"0o?[0-7]+", text):
        return text.lstrip("0o") or "0"
    return loader.construct_yaml_int(node)


_SettingsLoader.add_constructor("tag:yaml.org,2002:int", _construct_int)


def _section(file_config: dict, key: str) -> dict:
    # "git:" with every key commented out loads as None
    section = file_config.get(key)
    return dict(section) if isinstance(section, dict) else {}


def load_settings(config_path: str = "syskit.yaml") -> AppSettings:
    """
    Loads configuration merging: Defaults (Schema) < YAML File (Config) < Environment Vars.
    """

    # 1. Load YAML Config
    file_config = {}
    path = Path(config_path)
    if path.exists():
        try:
            with open(path, 'r') as f:
                file_config = yaml.load(f, Loader=_SettingsLoader) or {}
            if not isinstance(file_config, dict):
                raise yaml.YAMLError(f"expected a mapping at top level, got {type(file_config).__name__}")
        except (OSError, yaml.YAMLError) as e:
            # The logger is not configured yet at this point
            print(f"[Warning] Failed to load {config_path}: {e}")
            file_config = {}

    # 2. Load Environment Variables (Overrides)
    env_config = {
        "environment": os.getenv("ENV"),
        "log_file": os.getenv("SYSKIT_LOG_FILE"),
        "inventory_file": os.getenv("SYSKIT_INVENTORY"),
        "git": {
            "host": os.getenv("SYSKIT_GIT_HOST"),
            "account": os.getenv("SYSKIT_GIT_ACCOUNT"),
            "branch": os.getenv("SYSKIT_GIT_BRANCH"),
        },
    }

    # Cleanup: remove None/Empty keys from ENV dictionaries
    def clean_none(d: Union[Dict, None]):
        if not isinstance(d, dict): return d
        return {k: clean_none(v) for k, v in d.items() if v is not None and v != {}}

    env_config = clean_none(env_config)

    # 3. Merge Logic (Env > File > Defaults)

    # --- Git ---
    git_final = {**_section(file_config, "git"), **env_config.get("git", {})}
    git_obj = GitSettings(**{k: str(v) for k, v in git_final.items() if k in GitSettings.__annotations__})

    # --- Files ---
    files_file = _section(file_config, "files")
    files_obj = FileSettings(**{k: str(v) for k, v in files_file.items() if k in FileSettings.__annotations__})

    # --- App Root ---
    root_keys = ("inventory_file", "log_file", "environment")
    root_final = {k: v for k, v in file_config.items() if k in root_keys}
    root_final.update({k: v for k, v in env_config.items() if k in root_keys})

    return AppSettings(git=git_obj, files=files_obj, **root_final)
