import json
from typing import Any, Mapping, Optional
from xml.etree import ElementTree

from pydantic import BaseModel


def encode_json(value: Any) -> bytes:
    """Serialize ``value`` to compact JSON bytes.

    Pydantic models are dumped by alias so the wire names match the model's
    declared field aliases.
    """
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True).encode("utf-8")
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    ).encode("utf-8")


def encode_xml(value: Any, root_tag: Optional[str] = None) -> bytes:
    """Serialize ``value`` to XML bytes.

    Accepted inputs:
        - an ``Element``, written as is
        - a pydantic model, written under a root element named after its class
          (or ``root_tag``)
        - a mapping, written under ``root_tag``

    Raises:
        TypeError: For unsupported values, including a mapping with no root tag.
    """
    if isinstance(value, ElementTree.Element):
        element = value
    elif isinstance(value, BaseModel):
        element = _to_element(
            root_tag or type(value).__name__, value.model_dump(by_alias=True)
        )
    elif isinstance(value, Mapping):
        if not root_tag:
            raise TypeError("xml: unsupported type: mapping without a root tag")
        element = _to_element(root_tag, value)
    else:
        raise TypeError(f"xml: unsupported type: {type(value).__name__}")

    return ElementTree.tostring(element, encoding="utf-8", xml_declaration=False)


def _to_element(tag: str, value: Any) -> ElementTree.Element:
    element = ElementTree.Element(tag)
    _fill(element, value)
    return element


def _fill(element: ElementTree.Element, value: Any) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            if item is None:
                continue
            if isinstance(item, (list, tuple)):
                for entry in item:
                    _fill(ElementTree.SubElement(element, str(key)), entry)
            else:
                _fill(ElementTree.SubElement(element, str(key)), item)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif value is not None:
        element.text = str(value)
