"""
YAML configuration loader.

Plain YAML files are read directly; files named *.enc.yaml are treated as
SOPS-encrypted and decrypted through the sops binary first.
"""

import subprocess
from pathlib import Path
from typing import Any

import yaml


def is_sops_file(file_path: Path) -> bool:
    """Check whether a config path follows the SOPS naming convention."""
    return file_path.name.endswith((".enc.yaml", ".enc.yml"))


def decrypt_sops_file(file_path: Path) -> dict[str, Any]:
    """
    Decrypt a SOPS-encrypted file and return parsed YAML.

    Args:
        file_path: Path to the encrypted file

    Returns:
        Decrypted configuration as dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        RuntimeError: If SOPS decryption fails
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Encrypted config file not found: {file_path}")

    try:
        result = subprocess.run(
            ["sops", "-d", str(file_path)],
            capture_output=True,
            text=True,
            check=True,
        )
        return yaml.safe_load(result.stdout) or {}
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"SOPS decryption failed: {e.stderr}") from e
    except FileNotFoundError:
        raise RuntimeError(
            "SOPS not installed. Install with: brew install sops (macOS) "
            "or download from https://github.com/getsops/sops/releases"
        )


def load_config_file(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        file_path: Path to a plain or SOPS-encrypted YAML file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        RuntimeError: If the file cannot be decrypted or is not a mapping
    """
    if is_sops_file(file_path):
        config = decrypt_sops_file(file_path)
    else:
        with open(file_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise RuntimeError(
            f"Config file {file_path} must contain a mapping, "
            f"got {type(config).__name__}"
        )
    return config
