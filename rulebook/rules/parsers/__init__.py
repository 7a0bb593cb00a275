from rulebook.rules.detection import DEFAULT_TABLES, DetectionTables
from rulebook.rules.models import Rule
from rulebook.rules.parsers.base import IRuleParser
from rulebook.rules.parsers.front_matter import FrontMatterRuleParser
from rulebook.rules.parsers.generic import GenericRuleParser
from rulebook.rules.parsers.heading import HeadingRuleParser
from rulebook.rules.parsers.listing import ListRuleParser
from rulebook.rules.sniffer import Classification, Dialect

PARSER_TYPES: dict[Dialect, type[IRuleParser]] = {
    Dialect.FRONT_MATTER: FrontMatterRuleParser,
    Dialect.LIST: ListRuleParser,
    Dialect.HEADING: HeadingRuleParser,
    Dialect.GENERIC: GenericRuleParser,
}


def create_parser(
    classification: Classification, tables: DetectionTables = DEFAULT_TABLES
) -> IRuleParser:
    parser_type = PARSER_TYPES[classification.dialect]
    return parser_type(source_format=classification.source_format, tables=tables)


def parse_rule_text(
    raw_text: str,
    file_path: str,
    classification: Classification,
    tables: DetectionTables = DEFAULT_TABLES,
) -> Rule:
    return create_parser(classification, tables).parse(raw_text, file_path)


__all__ = [
    "FrontMatterRuleParser",
    "GenericRuleParser",
    "HeadingRuleParser",
    "IRuleParser",
    "ListRuleParser",
    "PARSER_TYPES",
    "create_parser",
    "parse_rule_text",
]
