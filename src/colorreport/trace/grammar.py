DIRECTIVE_GRAMMAR = r"""
start: rule (";" rule)*

rule: ACTION FIELD "=" PATTERN

ACTION: "hide" | "show"
FIELD: "module" | "file" | "name"
PATTERN: /[^;\s]+/

%import common.WS
%ignore WS
"""
