"""Core formatting components.

- tokens: builtin token functions and the registrable token table
- formatter: template scanning with brace escapes
- relative: verbose breakdown and banded short phrase engines
- engine: ``DateFormatter`` tying tokens, labels and a clock together
- config: Pydantic configuration schema and YAML loading
"""
