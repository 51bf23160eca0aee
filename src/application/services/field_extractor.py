"""Field extraction over DDI codebooks.

Runs namespaced path queries relative to the codebook root. No match is a
normal outcome and yields an empty list; callers map that to FAIL.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from domain.ddi import NAMESPACES
from domain.errors import FieldExtractionError

logger = logging.getLogger(__name__)


def extract_nodes(codebook: ET.Element, field_path: str) -> List[ET.Element]:
    """Return the elements matching ``field_path`` in document order."""
    try:
        nodes = codebook.findall(field_path, NAMESPACES)
    except (SyntaxError, TypeError, KeyError) as e:
        raise FieldExtractionError(f"Cannot evaluate path '{field_path}': {e}") from e

    logger.debug(f"Path '{field_path}' matched {len(nodes)} node(s)")
    return nodes


def node_text(node: ET.Element) -> str:
    """Full text content of a node, whitespace-trimmed."""
    return "".join(node.itertext()).strip()


def node_attribute(node: ET.Element, name: str) -> Optional[str]:
    return node.get(name)
