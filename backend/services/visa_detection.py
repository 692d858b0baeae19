"""Visa and work-authorization signal detection.

Signals come from two places: the visa status the user picked, and
visa-related terms found in the resume text. Any signal flags the
analysis for visa-aware handling downstream.
"""

import logging
import re
from types import MappingProxyType

from models.responses import UserContext, VisaSignalResult

logger = logging.getLogger(__name__)

_I = re.IGNORECASE

# (pattern, label). Abbreviations that collide with ordinary words
# (OPT, CPT, EAD, ...) are matched uppercase-only.
VISA_PATTERNS: tuple[tuple[re.Pattern, str], ...] = (
    # Visa classes
    (re.compile(r"\bH[- ]?1B\b", _I), "H-1B visa mention"),
    (re.compile(r"\bH[- ]?1B1\b", _I), "H-1B1 visa mention"),
    (re.compile(r"\bH[- ]?2[AB]\b", _I), "H-2A/H-2B visa mention"),
    (re.compile(r"\bH[- ]?4\b", _I), "H-4 visa mention"),
    (re.compile(r"\bL[- ]?1[AB]?\b", _I), "L-1 visa mention"),
    (re.compile(r"\bO[- ]?1[AB]?\b", _I), "O-1 visa mention"),
    (re.compile(r"\bTN[- ]?visa\b", _I), "TN visa mention"),
    (re.compile(r"\bE[- ]?[23]\b", _I), "E-2/E-3 visa mention"),
    (re.compile(r"\bJ[- ]?1\b", _I), "J-1 visa mention"),
    (re.compile(r"\bF[- ]1\b", _I), "F-1 visa mention"),
    (re.compile(r"\bM[- ]1\b", _I), "M-1 visa mention"),
    # Work authorization documents
    (re.compile(r"\bOPT\b"), "OPT (Optional Practical Training) mention"),
    (re.compile(r"\bCPT\b"), "CPT (Curricular Practical Training) mention"),
    (re.compile(r"\bSTEM[- ]?OPT\b", _I), "STEM OPT extension mention"),
    (re.compile(r"\bEAD\b"), "EAD (Employment Authorization Document) mention"),
    (re.compile(r"\bDACA\b"), "DACA (Deferred Action for Childhood Arrivals) mention"),
    (re.compile(r"\bTPS\b"), "TPS (Temporary Protected Status) mention"),
    # General immigration terms
    (re.compile(r"\bwork\s+authoriz(?:ation|ed)\b", _I), "Work authorization mention"),
    (re.compile(r"\bemployment\s+authoriz(?:ation|ed)\b", _I), "Employment authorization mention"),
    (re.compile(r"\bvisa\s+sponsor(?:ship|ed)?\b", _I), "Visa sponsorship mention"),
    (re.compile(r"\bsponsorship\s+(?:required|needed|available)\b", _I), "Sponsorship requirement mention"),
    (re.compile(r"\brequires?\s+(?:visa\s+)?sponsorship\b", _I), "Requires sponsorship mention"),
    (re.compile(r"\bimmigration\s+status\b", _I), "Immigration status mention"),
    (re.compile(r"\bgreen\s+card\b", _I), "Green card mention"),
    (re.compile(r"\bpermanent\s+residen(?:t|ce|cy)\b", _I), "Permanent residency mention"),
    (re.compile(r"\bauthoriz(?:ed|ation)\s+to\s+work\b", _I), "Authorization to work mention"),
    (re.compile(r"\blegally\s+authorized\b", _I), "Legally authorized mention"),
    (re.compile(r"\bwork\s+permit\b", _I), "Work permit mention"),
    # USCIS forms
    (re.compile(r"\bI[- ]?9\b"), "I-9 verification mention"),
    (re.compile(r"\bI[- ]?140\b"), "I-140 petition mention"),
    (re.compile(r"\bI[- ]?485\b"), "I-485 adjustment of status mention"),
    (re.compile(r"\bI[- ]?765\b"), "I-765 (EAD application) mention"),
    (re.compile(r"\bUSCIS\b"), "USCIS mention"),
)

# Selected statuses that imply visa sponsorship questions
CONTEXT_STATUS_LABELS: MappingProxyType[str, str] = MappingProxyType({
    "h1b": "User selected H-1B visa status",
    "opt_cpt": "User selected OPT/CPT visa status",
    "other": "User selected 'Other' visa status",
})


def detect_visa_status(resume_text: str, user_context: UserContext | None = None) -> VisaSignalResult:
    """Collect visa signals from the user's selected status and the resume text."""
    signals: list[str] = []

    status = user_context.visa_status if user_context else None
    if status in CONTEXT_STATUS_LABELS:
        signals.append(CONTEXT_STATUS_LABELS[status])

    if resume_text and resume_text.strip():
        signals.extend(label for pattern, label in VISA_PATTERNS if pattern.search(resume_text))

    unique = list(dict.fromkeys(signals))
    if unique:
        logger.info("Visa signals detected: %d", len(unique))
    return VisaSignalResult(visa_flagged=bool(unique), signals=unique)
