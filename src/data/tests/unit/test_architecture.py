"""Architecture tests using pytest-archon.

These tests enforce the boundaries between the domain, ports and
infrastructure layers of the Aroma data layer.
"""

from pytest_archon import archrule


class TestDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain entities should not know how they are stored."""
        (
            archrule("domain_no_infrastructure")
            .match("aroma.domain*")
            .should_not_import("aroma.infrastructure*", "infrastructure*")
            .check("aroma")
        )

    def test_domain_does_not_import_store_drivers(self):
        """Domain objects should be driver-agnostic."""
        (
            archrule("domain_no_drivers")
            .match("aroma.domain*")
            .should_not_import("cassandra*", "sqlalchemy*")
            .check("aroma")
        )


class TestPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_do_not_import_infrastructure(self):
        """Ports define interfaces and must not know their implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("aroma.ports*")
            .should_not_import("aroma.infrastructure*", "cassandra*", "sqlalchemy*")
            .check("aroma")
        )


class TestInfrastructureBoundaries:
    """Tests that the repository families stay independent."""

    def test_memory_repositories_do_not_import_drivers(self):
        """The in-memory twin must run without any store driver installed."""
        (
            archrule("memory_no_drivers")
            .match("aroma.infrastructure.memory*")
            .should_not_import("cassandra*", "sqlalchemy*")
            .check("aroma")
        )

    def test_cassandra_repositories_do_not_import_sql(self):
        (
            archrule("cassandra_no_sql")
            .match("aroma.infrastructure.cassandra*")
            .should_not_import("aroma.infrastructure.sql*", "sqlalchemy*")
            .check("aroma")
        )

    def test_sql_repositories_do_not_import_cassandra(self):
        (
            archrule("sql_no_cassandra")
            .match("aroma.infrastructure.sql*")
            .should_not_import("aroma.infrastructure.cassandra*", "cassandra*")
            .check("aroma")
        )

    def test_shared_kernel_is_independent(self):
        """The shared kernel must not depend on any bounded context."""
        (
            archrule("shared_kernel_independent")
            .match("shared_kernel*")
            .should_not_import("aroma*", "infrastructure*")
            .check("shared_kernel")
        )
