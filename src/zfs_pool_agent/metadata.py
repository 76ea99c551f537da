# --- START OF FILE metadata.py ---
"""OCF resource-agent meta-data document."""

import xml.etree.ElementTree as ET

from zfs_pool_agent import constants
from zfs_pool_agent.help_strings import HELP
from zfs_pool_agent.version import __version__

AGENT_NAME = "ZFS"
OCF_DOCTYPE = '<!DOCTYPE resource-agent SYSTEM "ra-api-1.dtd">'


def _text_element(parent: ET.Element, tag: str, text: str, **attrib) -> ET.Element:
    element = ET.SubElement(parent, tag, attrib)
    element.text = text
    return element


def build_metadata() -> ET.Element:
    root = ET.Element("resource-agent", {"name": AGENT_NAME, "version": __version__})
    _text_element(root, "version", "1.0")
    _text_element(root, "longdesc", HELP["agent"]["long"], lang="en")
    _text_element(root, "shortdesc", HELP["agent"]["short"], lang="en")

    parameters = ET.SubElement(root, "parameters")
    for name, info in HELP["parameters"].items():
        param = ET.SubElement(parameters, "parameter", {
            "name": name,
            "unique": "1" if info["unique"] else "0",
            "required": "1" if info["required"] else "0",
        })
        _text_element(param, "longdesc", info["long"], lang="en")
        _text_element(param, "shortdesc", info["short"], lang="en")
        content = ET.SubElement(param, "content", {"type": info["type"]})
        if info["default"] is not None:
            content.set("default", info["default"])

    actions = ET.SubElement(root, "actions")
    for action, timeout, interval, depth in constants.ACTION_TIMEOUTS:
        attrib = {"name": action, "timeout": f"{timeout}s"}
        if interval is not None:
            attrib["interval"] = f"{interval}s"
        if depth is not None:
            attrib["depth"] = str(depth)
        ET.SubElement(actions, "action", attrib)
    return root


def metadata_xml() -> str:
    root = build_metadata()
    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0"?>\n{OCF_DOCTYPE}\n{body}\n'

# --- END OF FILE metadata.py ---
