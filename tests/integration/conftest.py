"""Shared fixtures for change tracker integration tests.

Provides a registry of realistic entity classes (users, addresses, contact
methods) and a tracker wired to it, so integration tests can exercise the
full extract-then-format pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

import pytest

from change_tracker import EntityChangeTracker, MetadataRegistry
from change_tracker.metadata import FIELD_METADATA_KEY
from change_tracker.models.config import FormatConfig, TrackerConfig

REGISTRY = MetadataRegistry()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@REGISTRY.track_entity(name="地址", fields={"street": "街道", "city": "城市"})
@dataclass
class Address:
    street: str
    city: str


@REGISTRY.track_entity(name="用户")
@dataclass
class User:
    username: str = field(metadata={FIELD_METADATA_KEY: "用户名"})
    address: Address | None = field(default=None, metadata={FIELD_METADATA_KEY: "地址"})
    tags: list[str] = field(default_factory=list, metadata={FIELD_METADATA_KEY: "标签"})


@REGISTRY.track_entity(
    name="联系方式",
    object_hash=lambda contact, index: contact.type,
    exclude_undefined=True,
    fields={"type": "类型", "value": "值"},
)
@dataclass
class Contact:
    type: str
    value: str
    exclude_field: str = ""


@REGISTRY.track_entity(name="用户", fields={"name": "用户名", "contacts": "联系方式"})
@dataclass
class UserWithContacts:
    name: str
    contacts: list[Contact] = field(default_factory=list)


class Status(Enum):
    ACTIVE = "active"
    BANNED = "banned"


class Level(IntEnum):
    LOW = 1
    HIGH = 2


@REGISTRY.track_entity(name="账户", fields={"status": "状态", "level": "等级"})
@dataclass
class Account:
    status: Status
    level: Level


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def make_user(
    username: str = "张三",
    street: str = "旧街道",
    city: str = "北京",
    tags: list[str] | None = None,
) -> User:
    """Create a User with sensible defaults for testing."""
    return User(
        username=username,
        address=Address(street=street, city=city),
        tags=["标签1"] if tags is None else tags,
    )


def make_contacts_user(
    email: str = "old@example.com",
    qq: str = "837233287",
    *,
    qq_first: bool = False,
    note: str = "快乐星球",
) -> UserWithContacts:
    """Create a UserWithContacts holding one e-mail and one QQ contact."""
    contacts = [
        Contact(type="email", value=email, exclude_field=note),
        Contact(type="qq", value=qq, exclude_field=note),
    ]
    if qq_first:
        contacts.reverse()
    return UserWithContacts(name="张三", contacts=contacts)


def make_tracker(locale: str = "zh", placeholder: str = "--") -> EntityChangeTracker:
    return EntityChangeTracker(REGISTRY, TrackerConfig(format=FormatConfig(locale=locale, placeholder=placeholder)))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def tracker() -> EntityChangeTracker:
    """Fresh tracker (and metadata cache) over the shared registry."""
    return make_tracker()
