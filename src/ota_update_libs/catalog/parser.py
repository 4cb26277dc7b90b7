# Copyright 2025 TIER IV, INC. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Parse a bucket listing document into update records.

The bucket listing is the document returned by an S3-compatible object
    storage when listing a bucket, in XML:

    <ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">
      <Name>ota-updates</Name>
      <Contents>
        <Key>surya/PixelExperience_Plus_surya-13.0-20230520-1550-NIS-signed.zip</Key>
        <ETag>"9b2cf535f27731c974343645a3985328"</ETag>
        <Size>1384271234</Size>
      </Contents>
      ...
    </ListBucketResult>

    or the equivalent JSON form {"ListBucketResult": {"Contents": [...]}}.

Malformed <Contents> entries are skipped one by one, only a document without
    the expected structure fails the parsing.
"""

from __future__ import annotations

import codecs
import json
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, NamedTuple, Union

from pydantic import ValidationError

from ota_update_libs.common import StrOrPath
from ota_update_libs.consts import LIST_BUCKET_RESULT
from ota_update_libs.device_config import DeviceConfig
from ota_update_libs.errors import DecodeError, DocumentStructureError

from .compat import is_compatible
from .filename_codec import decode_object_key
from .schema import BucketObject, ListBucketResult, UpdateRecord

logger = logging.getLogger(__name__)

ListingDocument = Union[str, bytes, Mapping[str, Any]]


class ListingEntryError(NamedTuple):
    index: int
    reason: str


@dataclass
class ListingParseResult:
    """Outcome of parsing one bucket listing."""

    updates: List[UpdateRecord] = field(default_factory=list)
    incompatible: List[UpdateRecord] = field(default_factory=list)
    errors: List[ListingEntryError] = field(default_factory=list)


def _local_name(tag: str) -> str:
    # strip the "{namespace}" prefix
    return tag.rsplit("}", 1)[-1]


def _xml_element_to_obj(elem: ET.Element) -> Any:
    children = list(elem)
    if not children:
        return elem.text

    res: dict[str, Any] = {}
    for child in children:
        _tag, _value = _local_name(child.tag), _xml_element_to_obj(child)
        if _tag not in res:
            res[_tag] = _value
        elif isinstance(res[_tag], list):
            res[_tag].append(_value)
        else:
            res[_tag] = [res[_tag], _value]
    return res


def load_listing_document(raw: str | bytes) -> dict[str, Any]:
    """Load a bucket listing in XML or JSON form into a dict.

    Repeated XML child elements are collected into a list, element
        without children is converted to its text(None if empty), except
        for the root element, which is always converted to a dict.
    Raw bytes are passed to the XML parser as is, so that the encoding
        declared in the XML declaration is respected.
    """
    if isinstance(raw, bytes):
        _text = raw.removeprefix(codecs.BOM_UTF8).strip()
        _is_json = _text.startswith(b"{")
    else:
        _text = raw.removeprefix("\ufeff").strip()
        _is_json = _text.startswith("{")
    if not _text:
        raise DocumentStructureError("empty document")

    if _is_json:
        try:
            _loaded = json.loads(_text)
        except ValueError as e:  # also covers non UTF-8/16/32 encoded bytes
            raise DocumentStructureError(f"invalid JSON document: {e}") from e
        if not isinstance(_loaded, dict):
            raise DocumentStructureError("JSON document is not an object")
        return _loaded

    try:
        _root = ET.fromstring(_text)
    except ET.ParseError as e:
        raise DocumentStructureError(f"invalid XML document: {e}") from e

    _root_obj = _xml_element_to_obj(_root)
    if not isinstance(_root_obj, dict):
        _root_obj = {}
    return {_local_name(_root.tag): _root_obj}


def _load_list_bucket_result(document: ListingDocument) -> ListBucketResult:
    if isinstance(document, (str, bytes)):
        document = load_listing_document(document)

    _root = document.get(LIST_BUCKET_RESULT)
    if not isinstance(_root, Mapping):
        raise DocumentStructureError(f"{LIST_BUCKET_RESULT} not found")

    try:
        return ListBucketResult.model_validate(_root)
    except ValidationError as e:
        raise DocumentStructureError(f"invalid {LIST_BUCKET_RESULT}: {e}") from e


def _parse_entry(entry: Any, device_config: DeviceConfig) -> UpdateRecord:
    _obj = BucketObject.model_validate(entry)
    _decoded = decode_object_key(_obj.key)
    return UpdateRecord(
        name=_decoded.name,
        version=_decoded.version,
        timestamp=_decoded.timestamp,
        release_type=_decoded.release_type,
        download_id=_obj.etag,
        file_size=_obj.size,
        download_url=device_config.download_url_for(_obj.key),
    )


def collect_listing(
    document: ListingDocument,
    device_config: DeviceConfig,
    *,
    compatible_only: bool = False,
) -> ListingParseResult:
    """Parse <document>, collecting the failed entries instead of raising.

    Raises:
        DocumentStructureError if the document doesn't have a ListBucketResult.
    """
    _listing = _load_list_bucket_result(document)

    res = ListingParseResult()
    for idx, _entry in enumerate(_listing.contents):
        if _entry is None:
            continue

        try:
            _update = _parse_entry(_entry, device_config)
        except (ValidationError, DecodeError) as e:
            logger.warning(f"could not parse update object, {idx=}: {e!r}")
            res.errors.append(ListingEntryError(idx, str(e)))
            continue

        if compatible_only and not is_compatible(_update, device_config):
            logger.debug(f"ignoring incompatible update {_update.name}")
            res.incompatible.append(_update)
            continue
        res.updates.append(_update)
    return res


def parse_listing(
    document: ListingDocument,
    device_config: DeviceConfig,
    *,
    compatible_only: bool = False,
) -> list[UpdateRecord]:
    """Parse <document> into a list of update records, in the document order.

    Args:
        document: The bucket listing, in raw XML/JSON, or already loaded as dict.
        device_config: Used to compose the download URL and to check compatibility.
        compatible_only: Only keep updates compatible with <device_config>.

    Raises:
        DocumentStructureError if the document doesn't have a ListBucketResult.
    """
    return collect_listing(
        document, device_config, compatible_only=compatible_only
    ).updates


def parse_listing_file(
    fpath: StrOrPath,
    device_config: DeviceConfig,
    *,
    compatible_only: bool = False,
) -> list[UpdateRecord]:
    _raw = Path(fpath).read_bytes()
    return parse_listing(_raw, device_config, compatible_only=compatible_only)
