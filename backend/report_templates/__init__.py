"""
Templates Module - Report template contract and registration.
"""

from .base import ReportTemplate

from .sample_template import (
    ReservationReportTemplate,
    SAMPLE_TEMPLATE_ID,
    SAMPLE_TEMPLATE_NAME
)

from .registry import (
    ReportTemplateDescriptor,
    TemplateRegistry,
    TemplateNotFoundError,
    TemplateInactiveError,
    sample_template_descriptor,
    register_builtin_templates,
    create_default_registry
)

__all__ = [
    'ReportTemplate',
    'ReservationReportTemplate',
    'SAMPLE_TEMPLATE_ID',
    'SAMPLE_TEMPLATE_NAME',
    'ReportTemplateDescriptor',
    'TemplateRegistry',
    'TemplateNotFoundError',
    'TemplateInactiveError',
    'sample_template_descriptor',
    'register_builtin_templates',
    'create_default_registry',
]
