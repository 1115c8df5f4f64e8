"""Mapper between Project entities and project documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from agencyhub.domain.entities.project import Project

PROJECTS_COLLECTION = "projects"


class ProjectMapper:

    @staticmethod
    def to_domain(doc_id: str, data: Dict[str, Any]) -> Project:
        return Project(
            id=doc_id,
            tenant_id=data["tenantId"],
            name=data["name"],
            slug=data.get("slug", ""),
            industry=data.get("industry", ""),
            template_id=data.get("templateId"),
            status=data.get("status", "draft"),
            components=list(data.get("components", [])),
            settings=dict(data.get("settings", {})),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )

    @staticmethod
    def to_document(project: Project) -> Dict[str, Any]:
        return {
            "tenantId": project.tenant_id,
            "name": project.name,
            "slug": project.slug,
            "industry": project.industry,
            "templateId": project.template_id,
            "status": project.status,
            "components": project.components,
            "settings": project.settings,
            "createdAt": project.created_at.isoformat(),
            "updatedAt": project.updated_at.isoformat(),
        }


__all__ = ["ProjectMapper", "PROJECTS_COLLECTION"]
