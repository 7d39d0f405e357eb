from pytest_archon import archrule

PACKAGE = "swift_guarantee_engine"


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from any other part of the engine.
    """
    (
        archrule("primitives_isolation")
        .match(f"{PACKAGE}.primitives*")
        .should_not_import(f"{PACKAGE}.domain*")
        .should_not_import(f"{PACKAGE}.codec*")
        .should_not_import(f"{PACKAGE}.validation*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.ports*")
        .should_not_import(f"{PACKAGE}.middleware*")
        .check(PACKAGE)
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It must not import from adapters, ports, middleware or the wire codec.
    """
    (
        archrule("domain_isolation")
        .match(f"{PACKAGE}.domain*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.ports*")
        .should_not_import(f"{PACKAGE}.middleware*")
        .should_not_import(f"{PACKAGE}.codec*")
        .should_not_import(f"{PACKAGE}.validation*")
        .check(PACKAGE)
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match(f"{PACKAGE}.ports*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.engine")
        .check(PACKAGE)
    )


def test_codec_and_validation_are_stateless_services() -> None:
    """
    The codec and validator work on content alone; they never reach into
    storage or the engine facade, and neither depends on the other.
    """
    (
        archrule("codec_independence")
        .match(f"{PACKAGE}.codec*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.validation*")
        .should_not_import(f"{PACKAGE}.engine")
        .check(PACKAGE)
    )
    (
        archrule("validation_independence")
        .match(f"{PACKAGE}.validation*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.codec*")
        .should_not_import(f"{PACKAGE}.engine")
        .check(PACKAGE)
    )


def test_core_logic_does_not_import_adapters() -> None:
    """
    Correlation, responses, scenarios and notifications talk to storage
    through ports only. Adapters are wired in by the engine.
    """
    (
        archrule("core_logic_adapter_isolation")
        .match(f"{PACKAGE}.correlation*")
        .match(f"{PACKAGE}.responses*")
        .match(f"{PACKAGE}.scenarios*")
        .match(f"{PACKAGE}.notifications*")
        .should_not_import(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.engine")
        .check(PACKAGE)
    )


def test_adapters_do_not_import_engine() -> None:
    """
    Adapters implement ports; the engine composes them, never the reverse.
    """
    (
        archrule("adapters_layering")
        .match(f"{PACKAGE}.adapters*")
        .should_not_import(f"{PACKAGE}.engine")
        .should_not_import(f"{PACKAGE}.cqrs*")
        .check(PACKAGE)
    )
