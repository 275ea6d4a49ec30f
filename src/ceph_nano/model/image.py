# -*- coding: utf-8 -*-
from typing import Dict, List

from pydantic import BaseModel, Field


class ImageDetails(BaseModel):
    """Subset of an image inspection the cluster listing relies on."""

    repo_tags: List[str] = Field(default_factory=list)
    repo_digests: List[str] = Field(default_factory=list)
    created: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_attrs(cls, attrs: dict) -> "ImageDetails":
        """Build from the raw engine inspection payload.

        Labels are merged key by key from ``ContainerConfig`` (where older
        engines put them) and ``Config``; a non-empty ``Config`` value wins.
        """
        labels: Dict[str, str] = {}
        for section in ("ContainerConfig", "Config"):
            section_labels = (attrs.get(section) or {}).get("Labels") or {}
            for key, value in section_labels.items():
                if value or key not in labels:
                    labels[key] = value
        return cls(
            repo_tags=attrs.get("RepoTags") or [],
            repo_digests=attrs.get("RepoDigests") or [],
            created=attrs.get("Created") or "",
            labels=labels,
        )
