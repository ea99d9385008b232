"""Visual templates for exported resumes."""
from resume_builder.templates.styles import (
    DEFAULT_TEMPLATE,
    FontSpec,
    TemplateId,
    TemplateStyle,
    get_template_style,
    list_template_styles,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "FontSpec",
    "TemplateId",
    "TemplateStyle",
    "get_template_style",
    "list_template_styles",
]
