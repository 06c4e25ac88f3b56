"""
AI concierge for off-hours guest messaging
"""

from .concierge import ESCALATION_KEYWORDS, AIConcierge, detect_escalation, parse_json_content

__all__ = ["AIConcierge", "ESCALATION_KEYWORDS", "detect_escalation", "parse_json_content"]
