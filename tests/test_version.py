import pytest

from cogbump.version import Increment, IncrementCommand, IncrementKind, command_for


def test_increments_are_ordered_from_no_bump_to_major():
    shuffled = [Increment.PATCH, Increment.MAJOR, Increment.NO_BUMP, Increment.MINOR]
    kinds = [command_for(increment).kind for increment in sorted(shuffled)]
    assert kinds == [
        IncrementKind.NO_BUMP,
        IncrementKind.PATCH,
        IncrementKind.MINOR,
        IncrementKind.MAJOR,
    ]


@pytest.mark.parametrize(
    "smaller, larger",
    [
        (Increment.NO_BUMP, Increment.PATCH),
        (Increment.PATCH, Increment.MINOR),
        (Increment.MINOR, Increment.MAJOR),
        (Increment.NO_BUMP, Increment.MAJOR),
    ],
)
def test_larger_increment_wins(smaller, larger):
    assert smaller < larger
    assert max(smaller, larger) is larger


@pytest.mark.parametrize("increment", list(Increment))
def test_increment_equals_itself(increment):
    assert command_for(increment) == command_for(increment)
    assert not increment < increment
    assert max(increment, increment) is increment


@pytest.mark.parametrize(
    "increment, kind",
    [
        (Increment.MAJOR, IncrementKind.MAJOR),
        (Increment.MINOR, IncrementKind.MINOR),
        (Increment.PATCH, IncrementKind.PATCH),
        (Increment.NO_BUMP, IncrementKind.NO_BUMP),
    ],
)
def test_command_for_maps_each_increment(increment, kind):
    assert command_for(increment) == IncrementCommand(kind)


def test_default_command_is_auto():
    assert IncrementCommand().kind is IncrementKind.AUTO


def test_manual_command_requires_version():
    with pytest.raises(ValueError):
        IncrementCommand(IncrementKind.MANUAL)


def test_auto_package_command_requires_package():
    with pytest.raises(ValueError):
        IncrementCommand(IncrementKind.AUTO_PACKAGE)


def test_monorepo_global_command_keeps_package_increment():
    command = IncrementCommand(
        IncrementKind.AUTO_MONOREPO_GLOBAL, package_increment=Increment.MINOR
    )
    assert command.package_increment is Increment.MINOR