from rulebook.rules.models import Rule
from rulebook.rules.sniffer import Classification, Dialect, classify

__all__ = ["Classification", "Dialect", "Rule", "classify"]
