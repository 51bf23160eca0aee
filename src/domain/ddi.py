"""DDI Codebook 2.5 structure.

Namespace and field paths used to locate the elements each check reads.
Paths are relative to the ``codeBook`` element, which is the root of the
document returned by the metadata fetcher.
"""

from typing import Dict

DDI_NAMESPACE = "ddi:codebook:2_5"

NAMESPACES: Dict[str, str] = {"ddi": DDI_NAMESPACE}

CODEBOOK_TAG = f"{{{DDI_NAMESPACE}}}codeBook"
CODEBOOK_PATH = ".//ddi:codeBook"

# Field paths
ACCESS_RIGHTS_PATH = "ddi:stdyDscr/ddi:dataAccs/ddi:typeOfAccess"
PID_PATH = "ddi:stdyDscr/ddi:citation/ddi:titlStmt/ddi:IDNo"
KEYWORD_PATH = "ddi:stdyDscr/ddi:stdyInfo/ddi:subject/ddi:keyword"
TOPIC_CLASS_PATH = "ddi:stdyDscr/ddi:stdyInfo/ddi:subject/ddi:topcClas"
ANALYSIS_UNIT_PATH = "ddi:stdyDscr/ddi:stdyInfo/ddi:sumDscr/ddi:anlyUnit"
TIME_METHOD_PATH = "ddi:stdyDscr/ddi:method/ddi:dataColl/ddi:timeMeth"
SAMPLING_PROCEDURE_PATH = "ddi:stdyDscr/ddi:method/ddi:dataColl/ddi:sampProc"
COLLECTION_MODE_PATH = "ddi:stdyDscr/ddi:method/ddi:dataColl/ddi:collMode"

# Attribute names and the values checks gate on
AGENCY_ATTRIBUTE = "agency"
VOCAB_ATTRIBUTE = "vocab"
VOCAB_URI_ATTRIBUTE = "vocabURI"

ELSST_VOCAB_NAME = "ELSST"
ELSST_URI_SUBSTRING = "elsst.cessda.eu"
TOPIC_CLASS_VOCAB_NAME = "CESSDA Topic Classification"
