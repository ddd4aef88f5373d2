"""Command-line shell around the load optimizer: config, file I/O, audit."""

from optimizer_cli.compliance import ComplianceReport, audit_plan

__all__ = ["ComplianceReport", "audit_plan"]
