"""Typed decoding of catalog XML files.

The catalog format repeats sibling elements for multi-valued fields, so a field
may hold zero, one or many values. Decoding normalises every such field to a
list with :func:`as_list` and every scalar to a string that defaults to ``""``;
downstream code never needs to guard against absent elements.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")

ROOT_TAG = "item"


class AgentRecord(BaseModel):
    role: str = ""
    name: str


class FileRecord(BaseModel):
    name: str
    mime_type: str = ""


class CollectionRecord(BaseModel):
    identifier: str = ""
    title: str = ""
    description: str = ""
    collector: Optional[str] = None


class CatalogDocument(BaseModel):
    """Fields of one catalog XML file, with empty-string defaults."""

    identifier: str = ""
    archive_link: str = ""
    citation: str = ""
    description: str = ""
    title: str = ""
    region: str = ""
    origination_date: str = ""
    private: str = ""
    language: str = ""
    subject_languages: List[str] = Field(default_factory=list)
    content_languages: List[str] = Field(default_factory=list)
    data_categories: List[str] = Field(default_factory=list)
    admin_comment: str = ""
    data_access_conditions: str = ""
    agents: List[AgentRecord] = Field(default_factory=list)
    files: List[FileRecord] = Field(default_factory=list)
    collection: CollectionRecord = Field(default_factory=CollectionRecord)


def as_list(value: Union[None, T, Sequence[T]]) -> List[T]:
    """Coerce an absent, single or repeated value to a list of 0..n values."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]  # type: ignore[list-item]


def _strip_namespaces(root: ET.Element) -> None:
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]
        for key in [key for key in element.attrib if key.startswith("{")]:
            element.attrib[key.split("}", 1)[1]] = element.attrib.pop(key)


def _elements(parent: Optional[ET.Element], path: str) -> List[ET.Element]:
    if parent is None:
        return []
    return as_list(parent.findall(path))


def _text(parent: Optional[ET.Element], path: str) -> str:
    found = _elements(parent, path)
    if not found:
        return ""
    return "".join(found[0].itertext())


def _texts(parent: Optional[ET.Element], path: str) -> List[str]:
    return ["".join(element.itertext()) for element in _elements(parent, path)]


def _agents(root: ET.Element) -> List[AgentRecord]:
    agents = []
    for element in _elements(root, "agents/agent"):
        name = "".join(element.itertext()).strip()
        if name:
            agents.append(AgentRecord(role=element.get("role", ""), name=name))
    return agents


def _files(root: ET.Element) -> List[FileRecord]:
    files = []
    for element in _elements(root, "files/file"):
        name = _text(element, "name").strip()
        if name:
            files.append(FileRecord(name=name, mime_type=_text(element, "mimeType")))
    return files


def _collection(root: ET.Element) -> CollectionRecord:
    node = root.find("collection")
    collector = _text(node, "collector").strip()
    return CollectionRecord(
        identifier=_text(node, "identifier"),
        title=_text(node, "title"),
        description=_text(node, "description"),
        collector=collector or None,
    )


def parse_catalog_xml(text: str) -> CatalogDocument:
    """Decode catalog XML ``text``.

    Raises :class:`xml.etree.ElementTree.ParseError` for malformed XML and
    :class:`ValueError` when no ``<item>`` element is present.
    """

    root = ET.fromstring(text)
    _strip_namespaces(root)
    if root.tag != ROOT_TAG:
        nested = root.find(f".//{ROOT_TAG}")
        if nested is None:
            raise ValueError(f"no <{ROOT_TAG}> element in catalog document (root is <{root.tag}>)")
        root = nested
    return CatalogDocument(
        identifier=_text(root, "identifier"),
        archive_link=_text(root, "archiveLink"),
        citation=_text(root, "citation"),
        description=_text(root, "description"),
        title=_text(root, "title"),
        region=_text(root, "region"),
        origination_date=_text(root, "originationDate"),
        private=_text(root, "private"),
        language=_text(root, "language"),
        subject_languages=_texts(root, "subjectLanguages/language"),
        content_languages=_texts(root, "contentLanguages/language"),
        data_categories=_texts(root, "dataCategories/category"),
        admin_comment=_text(root, "adminInfo/adminComment"),
        data_access_conditions=_text(root, "adminInfo/dataAccessConditions"),
        agents=_agents(root),
        files=_files(root),
        collection=_collection(root),
    )
