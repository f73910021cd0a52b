#!/usr/bin/env python3
"""
Demo script for the identity cache.

Resolves a few names and identifiers through every tier and shows which
lookups are answered locally on the second pass.
"""

import time
from uuid import UUID

from identity_cache.logging_config import configure_logging
from identity_cache.services import IdentityResolver


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def timed(label: str, call) -> object:
    """Run a call and print its result and duration."""
    start = time.time()
    result = call()
    duration_ms = (time.time() - start) * 1000
    print(f"  {label:<45} -> {result!s:<38} {duration_ms:8.2f}ms")
    return result


def demo_name_lookups(resolver: IdentityResolver) -> None:
    """Resolve names twice: the second pass is served by the local index."""
    print_section("Name -> identifier")
    names = ["Notch", "jeb_", "Dinnerbone"]

    for attempt in ("cold", "warm"):
        print(f"\n  {attempt} pass:")
        for name in names:
            timed(f"resolve_identifier({name!r})", lambda n=name: resolver.resolve_identifier(n))


def demo_identifier_lookups(resolver: IdentityResolver) -> None:
    """Resolve identifiers to names."""
    print_section("Identifier -> name")
    identifier = UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")
    timed(f"resolve_name({identifier})", lambda: resolver.resolve_name(identifier))


def demo_literals(resolver: IdentityResolver) -> None:
    """Identifier literals bypass every cache tier."""
    print_section("Identifier literals")
    for text in ("069a79f4-44e9-4726-a5be-fca90e38aaf5", "069a79f444e94726a5befca90e38aaf5"):
        timed(f"resolve_identifier({text[:12]}...)", lambda t=text: resolver.resolve_identifier(t))


def main() -> None:
    """Run all demos."""
    configure_logging()
    print("\nIdentity Cache Demo")
    print("=" * 70)

    try:
        with IdentityResolver.create() as resolver:
            demo_name_lookups(resolver)
            demo_identifier_lookups(resolver)
            demo_literals(resolver)
            print(f"\nStats: {resolver.get_stats()}")

        print("\n" + "=" * 70)
        print("Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\nError: {e}")
        print("\nMake sure Redis is running:")
        print("  docker compose up -d")
        print("\nOr set REDIS_URL to your Redis instance.")


if __name__ == "__main__":
    main()
