from __future__ import annotations

import importlib.metadata
import json
from pathlib import Path
from typing import Optional


def _commit_from_direct_url() -> Optional[str]:
    # PEP 610 direct_url.json carries the VCS commit when installed from git
    try:
        dist = importlib.metadata.distribution("ansimark")
    except importlib.metadata.PackageNotFoundError:
        return None
    for file in dist.files or []:
        if file.name == "direct_url.json" and file.parent.name.endswith(".dist-info"):
            try:
                with Path(dist.locate_file(file)).open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError):
                return None
            return (data.get("vcs_info") or {}).get("commit_id")
    return None


def get_version_string() -> str:
    try:
        version = importlib.metadata.version("ansimark")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"
    commit = _commit_from_direct_url()
    return f"{version} ({commit[:7]})" if commit else version
