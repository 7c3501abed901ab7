"""Servicios de aplicación compartidos por los casos de uso."""

from app.application.services.availability_checker import AvailabilityChecker

__all__ = ["AvailabilityChecker"]
