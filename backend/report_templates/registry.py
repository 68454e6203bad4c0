"""
Template Registry Module
Registration descriptors and lookup for the report templates a host offers.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from config import config
from report_templates.base import ReportTemplate
from report_templates.sample_template import (
    SAMPLE_TEMPLATE_DESCRIPTION,
    SAMPLE_TEMPLATE_ID,
    SAMPLE_TEMPLATE_NAME,
    ReservationReportTemplate,
)

logger = logging.getLogger(__name__)


class TemplateNotFoundError(Exception):
    """Raised when no template is registered under an identifier."""
    pass


class TemplateInactiveError(Exception):
    """Raised when a registered template is switched off."""
    pass


@dataclass(frozen=True)
class ReportTemplateDescriptor:
    """Everything a host needs to discover and offer a report template."""
    identifier: str
    name: str
    factory: Callable[[], ReportTemplate]
    description: str = ""
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
        }


class TemplateRegistry:
    """Holds template descriptors keyed by their (case-insensitive) identifier."""

    def __init__(self):
        self._descriptors: dict[str, ReportTemplateDescriptor] = {}

    @staticmethod
    def _key(identifier: str) -> str:
        return identifier.strip().upper()

    def register(self, descriptor: ReportTemplateDescriptor) -> ReportTemplateDescriptor:
        """
        Register (or replace) a template descriptor.

        Args:
            descriptor: Descriptor to register

        Returns:
            The registered descriptor
        """
        key = self._key(descriptor.identifier)
        if key in self._descriptors:
            logger.warning(f"Replacing report template registration {descriptor.identifier}")

        self._descriptors[key] = descriptor
        logger.info(
            f"Registered report template '{descriptor.name}' "
            f"({descriptor.identifier}, active={descriptor.is_active})"
        )
        return descriptor

    def unregister(self, identifier: str) -> None:
        """Remove a template; unknown identifiers raise TemplateNotFoundError."""
        key = self._key(identifier)
        if key not in self._descriptors:
            raise TemplateNotFoundError(f"Report template not found: {identifier}")
        del self._descriptors[key]
        logger.info(f"Unregistered report template {identifier}")

    def get(self, identifier: str) -> ReportTemplateDescriptor:
        """
        Look up a descriptor.

        Raises:
            TemplateNotFoundError: If nothing is registered under identifier
        """
        descriptor = self._descriptors.get(self._key(identifier))
        if descriptor is None:
            raise TemplateNotFoundError(f"Report template not found: {identifier}")
        return descriptor

    def create(self, identifier: str) -> ReportTemplate:
        """
        Build a new template instance for one report.

        Raises:
            TemplateNotFoundError: If nothing is registered under identifier
            TemplateInactiveError: If the template is not active
        """
        descriptor = self.get(identifier)
        if not descriptor.is_active:
            raise TemplateInactiveError(f"Report template is not active: {descriptor.name}")
        return descriptor.factory()

    def active_templates(self) -> list[ReportTemplateDescriptor]:
        """Active descriptors, sorted by name."""
        return sorted(
            (descriptor for descriptor in self._descriptors.values() if descriptor.is_active),
            key=lambda descriptor: descriptor.name
        )

    def __contains__(self, identifier: str) -> bool:
        return self._key(identifier) in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


def sample_template_descriptor(is_active: Optional[bool] = None) -> ReportTemplateDescriptor:
    """Descriptor for the built-in sample template."""
    if is_active is None:
        is_active = config.SAMPLE_TEMPLATE_ACTIVE

    return ReportTemplateDescriptor(
        identifier=SAMPLE_TEMPLATE_ID,
        name=SAMPLE_TEMPLATE_NAME,
        description=SAMPLE_TEMPLATE_DESCRIPTION,
        factory=ReservationReportTemplate,
        is_active=is_active
    )


def register_builtin_templates(registry: TemplateRegistry) -> TemplateRegistry:
    """Register the templates shipped with this package."""
    registry.register(sample_template_descriptor())
    return registry


def create_default_registry() -> TemplateRegistry:
    """A registry holding the built-in templates."""
    return register_builtin_templates(TemplateRegistry())
