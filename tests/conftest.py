"""Shared fixtures for provider tests."""

import copy

import pytest

from cms_data_transfer.platforms.local_cms import (
    LocalCmsSourceProvider,
    LocalCmsSourceProviderOptions,
    MemoryCmsInstance,
)

ARTICLE_UID = "api::article.article"
AUTHOR_UID = "api::author.author"
SEO_UID = "shared.seo"

SNAPSHOT = {
    "contentTypes": {
        ARTICLE_UID: {
            "uid": ARTICLE_UID,
            "modelType": "contentType",
            "kind": "collectionType",
            "attributes": {
                "title": {"type": "string"},
                "author": {
                    "type": "relation",
                    "relation": "manyToOne",
                    "target": AUTHOR_UID,
                    "inversedBy": "articles",
                },
                "seo": {"type": "component", "component": SEO_UID},
            },
        },
        AUTHOR_UID: {
            "uid": AUTHOR_UID,
            "modelType": "contentType",
            "kind": "collectionType",
            "attributes": {
                "name": {"type": "string"},
                "articles": {
                    "type": "relation",
                    "relation": "oneToMany",
                    "target": ARTICLE_UID,
                    "mappedBy": "author",
                },
            },
        },
        "api::tag.tag": {
            "uid": "api::tag.tag",
            "modelType": "contentType",
            "kind": "collectionType",
            "attributes": {"name": {"type": "string"}},
        },
        "api::category.category": {
            "uid": "api::category.category",
            "modelType": "contentType",
            "kind": "collectionType",
            "attributes": {"label": {"type": "string"}},
        },
        "api::homepage.homepage": {
            "uid": "api::homepage.homepage",
            "modelType": "contentType",
            "kind": "singleType",
            "attributes": {"headline": {"type": "string"}},
        },
    },
    "components": {
        SEO_UID: {
            "uid": SEO_UID,
            "modelType": "component",
            "attributes": {"metaTitle": {"type": "string"}},
        },
    },
    "data": {
        ARTICLE_UID: [
            {"id": 1, "title": "Hello", "author": {"id": 1}, "seo": {"id": 7, "metaTitle": "Hi"}},
            {"id": 2, "title": "World", "author": None},
        ],
        AUTHOR_UID: [
            {"id": 1, "name": "Ada", "articles": [{"id": 1}]},
        ],
    },
}


@pytest.fixture
def snapshot_document():
    """Snapshot with 3 entities, 2 links, no configuration, 5 content types and 1 component."""
    return copy.deepcopy(SNAPSHOT)


@pytest.fixture
def memory_instance(snapshot_document):
    """In-memory CMS instance built from the sample snapshot."""
    return MemoryCmsInstance.from_snapshot(snapshot_document)


@pytest.fixture
def provider(memory_instance):
    """Local CMS provider over the sample instance, not yet bootstrapped."""
    return LocalCmsSourceProvider(
        LocalCmsSourceProviderOptions(get_instance=lambda: memory_instance)
    )
