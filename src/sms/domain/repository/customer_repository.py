"""Abstract repository for Customer entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sms.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer, ordered by ID."""

    @abstractmethod
    def add(self, customer: Customer) -> Customer:
        """Insert a new customer and return it with its assigned ID."""
