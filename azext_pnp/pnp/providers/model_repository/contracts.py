# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import json
from typing import Any, List, NamedTuple, Optional


class ModelContext(NamedTuple):
    content: str
    resource_id: Optional[str] = None
    published: Optional[bool] = None
    etag: Optional[str] = None
    tags: Optional[List[str]] = None

    def get_document(self) -> Any:
        return json.loads(self.content)

    def to_dict(self) -> dict:
        result = {
            "resourceId": self.resource_id,
            "etag": self.etag,
            "published": self.published,
            "tags": self.tags,
        }
        try:
            result["content"] = self.get_document()
        except ValueError:
            result["content"] = self.content
        return result


class ModelSummary(NamedTuple):
    urn_id: str
    model_name: Optional[str] = None
    version: Optional[Any] = None
    model_type: Optional[str] = None
    etag: Optional[str] = None
    publisher_id: Optional[str] = None
    publisher_name: Optional[str] = None
    display_name: Optional[Any] = None
    description: Optional[Any] = None
    comment: Optional[str] = None
    created_on: Optional[str] = None
    updated_on: Optional[str] = None

    @classmethod
    def from_dict(cls, record: dict) -> "ModelSummary":
        return cls(
            urn_id=record.get("urnId") or record.get("id"),
            model_name=record.get("modelName"),
            version=record.get("version"),
            model_type=record.get("type") or record.get("pnpMetamodelType"),
            etag=record.get("etag"),
            publisher_id=record.get("publisherId") or record.get("tenantId"),
            publisher_name=record.get("publisherName") or record.get("tenantName"),
            display_name=record.get("displayName"),
            description=record.get("description"),
            comment=record.get("comment"),
            created_on=record.get("createdOn"),
            updated_on=record.get("updatedOn") or record.get("lastUpdated"),
        )

    def to_dict(self) -> dict:
        return {
            "urnId": self.urn_id,
            "modelName": self.model_name,
            "version": self.version,
            "type": self.model_type,
            "etag": self.etag,
            "publisherId": self.publisher_id,
            "publisherName": self.publisher_name,
            "displayName": self.display_name,
            "description": self.description,
            "comment": self.comment,
            "createdOn": self.created_on,
            "updatedOn": self.updated_on,
        }


class SearchResults(NamedTuple):
    results: List[ModelSummary]
    continuation_token: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Optional[dict]) -> "SearchResults":
        payload = payload or {}
        return cls(
            results=[ModelSummary.from_dict(record) for record in payload.get("results") or []],
            continuation_token=payload.get("continuationToken") or None,
        )

    def to_dict(self) -> dict:
        return {
            "continuationToken": self.continuation_token,
            "results": [summary.to_dict() for summary in self.results],
        }
