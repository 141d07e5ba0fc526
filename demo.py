import logging
import os
import sys

from rbset import EmptyContainerError, RedBlackTree, TraversalOrder

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

REMOVE_FLAG = "--remove"


def parse_value(raw: str) -> int | str:
    try:
        return int(raw)
    except ValueError:
        return raw


def parse_args(argv: list[str]) -> tuple[list[int | str], list[int | str]]:
    """Split ``argv`` into values to insert and values to remove afterwards."""
    if REMOVE_FLAG in argv:
        split = argv.index(REMOVE_FLAG)
        inserts, removals = argv[:split], argv[split + 1 :]
    else:
        inserts, removals = argv, []
    return [parse_value(v) for v in inserts], [parse_value(v) for v in removals]


def main(argv: list[str]) -> int:
    inserts, removals = parse_args(argv)

    try:
        tree = RedBlackTree(inserts, check_invariants=True)
        for value in removals:
            tree.remove(value)
    except TypeError as e:
        logger.error(f"Values must be mutually comparable: {e}")
        return 2

    logger.debug(f"Inserted {inserts}, removed {removals}")

    print(f"in-order: {list(tree.walk(TraversalOrder.IN))}")
    try:
        print(f"min: {tree.min()}  max: {tree.max()}")
    except EmptyContainerError as e:
        print(f"min/max: {e}")
    print(f"size: {tree.size()}")
    print(f"level-order: {tree.dump()}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
