"""
Literal placeholder substitution for feed templates.

Feed settings and field mappings carry templates such as
"{{product_title}} - {{sku}}". Substitution is plain string
replacement, no regex: for each known placeholder the first
occurrence is replaced, missing values become "", and placeholders
that are not in the table are left as written.
"""

from typing import Iterable, Optional

PLACEHOLDER_OPEN = "{{"
PLACEHOLDER_CLOSE = "}}"


def placeholder(name: str) -> str:
    """'sku' → '{{sku}}'"""
    return f"{PLACEHOLDER_OPEN}{name}{PLACEHOLDER_CLOSE}"


def render_template(
    template: Optional[str],
    replacements: Iterable[tuple[str, Optional[str]]],
) -> str:
    """
    Substitute placeholders in a template.

    Args:
        template: Template text; None renders as ""
        replacements: Ordered (placeholder name, value) pairs

    Returns:
        Rendered text

    Example:
        >>> render_template("{{product_title}} - {{sku}}",
        ...                 [("product_title", "Shirt"), ("sku", "S1")])
        'Shirt - S1'
    """
    if not template:
        return ""

    rendered = template
    for name, value in replacements:
        rendered = rendered.replace(placeholder(name), value or "", 1)

    return rendered
