from typing import Optional


class RuntimeConfig:
    """
    Singleton class to hold global runtime configurations.
    """
    VERBOSE: bool = True
    ASSUME_YES: bool = False
    SUDO_PASSWORD: Optional[str] = None
    CONFIG_FILE: str = "syskit.yaml"


config = RuntimeConfig()
