"""Starter project seeded for a new sub-client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from agencyhub.domain.entities.tenant import utc_now


def default_components(project_name: str) -> List[Dict[str, Any]]:
    """Hero, features and contact sections for a fresh site."""
    return [
        {
            "id": "hero-1",
            "type": "hero",
            "props": {
                "title": f"Bienvenido a {project_name}",
                "subtitle": "Transforma tu presencia digital",
                "backgroundImage": "",
            },
        },
        {
            "id": "features-1",
            "type": "features",
            "props": {
                "title": "Nuestros Servicios",
                "features": [
                    {"title": f"Servicio {n}", "description": "Descripción del servicio"}
                    for n in (1, 2, 3)
                ],
            },
        },
        {
            "id": "contact-1",
            "type": "contact",
            "props": {"title": "Contáctanos", "showForm": True},
        },
    ]


@dataclass
class Project:
    """A tenant-scoped site project."""

    id: Optional[str]
    tenant_id: str
    name: str
    slug: str
    industry: str = ""
    template_id: Optional[str] = None
    status: str = "draft"
    components: List[Dict[str, Any]] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


__all__ = ["Project", "default_components"]
