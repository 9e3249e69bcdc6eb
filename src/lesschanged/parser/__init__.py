from lesschanged.parser.nodes import (
    ExpressionArgument,
    FunctionCall,
    ImportDirective,
    ParsedStylesheet,
    QuotedArgument,
    VariableArgument,
    VariableValue,
)
from lesschanged.parser.scanner import scan_stylesheet, tokenize

__all__ = [
    "scan_stylesheet",
    "tokenize",
    "ParsedStylesheet",
    "ImportDirective",
    "FunctionCall",
    "QuotedArgument",
    "VariableArgument",
    "ExpressionArgument",
    "VariableValue",
]
