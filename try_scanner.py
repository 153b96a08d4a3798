from byte_scanner.services.device import END_OF_DATA, END_OF_TOKEN, ScannerDevice, open_device
import logging
import sys

READ_SIZE = 128


def collect_tokens(dev: ScannerDevice, logger: logging.Logger, read_size: int = READ_SIZE):
    """Read until end of data, returning (tokens, chunks) as seen by the caller."""
    tokens: list[bytes] = []
    chunks: list[bytes] = []
    current = bytearray()
    buf = bytearray(read_size)
    while True:
        n = dev.readinto(buf)
        if n > 0:
            chunk = bytes(buf[:n])
            chunks.append(chunk)
            current += chunk
            logger.info("  Chunk %d: %r (%d bytes)", len(chunks) - 1, chunk, n)
        elif n == END_OF_TOKEN:
            logger.info("   End of Token %d", len(tokens))
            tokens.append(bytes(current))
            current.clear()
        else:
            logger.info("End of data")
            return tokens, chunks


def default_separators(logger):
    with open_device(logger) as dev:
        dev.write(b"hello:world\tthis is \na test")
        tokens, _ = collect_tokens(dev, logger)
    return tokens == [b"hello", b"world", b"this", b"is", b"a", b"test"]


def custom_separators(logger):
    with open_device(logger) as dev:
        dev.ioctl(0)
        dev.write(b"-,")
        dev.write(b"hello-world,miguel-carrasco")
        tokens, _ = collect_tokens(dev, logger)
    return tokens == [b"hello", b"world", b"miguel", b"carrasco"]


def non_cumulative_writes(logger):
    with open_device(logger) as dev:
        dev.write(b"first:test")
        dev.write(b"second:test")
        tokens, _ = collect_tokens(dev, logger)
    return tokens == [b"second", b"test"]


def partial_reads(logger):
    with open_device(logger) as dev:
        dev.write(b"verylongtoken:short")
        tokens, chunks = collect_tokens(dev, logger, read_size=4)
    return chunks == [b"very", b"long", b"toke", b"n", b"shor", b"t"] and len(tokens) == 2


def nul_bytes(logger):
    with open_device(logger) as dev:
        dev.write(b"hel\0lo:world")
        tokens, _ = collect_tokens(dev, logger)
    return tokens == [b"hel\0lo", b"world"]


def nul_separator(logger):
    with open_device(logger) as dev:
        dev.ioctl(0)
        dev.write(b"\0:")
        dev.write(b"he\0llo\0world:this:is:a:test")
        tokens, _ = collect_tokens(dev, logger)
    return tokens == [b"he", b"llo", b"world", b"this", b"is", b"a", b"test"]


def empty_write(logger):
    with open_device(logger) as dev:
        dev.write(b"")
        return dev.readinto(bytearray(0)) == END_OF_DATA


def only_separators(logger):
    with open_device(logger) as dev:
        dev.write(b":\t \n::  \t")
        tokens, chunks = collect_tokens(dev, logger)
    return tokens == [] and chunks == []


def multiple_instances(logger):
    with open_device(logger) as dev1, open_device(logger) as dev2:
        dev1.ioctl(0)
        dev1.write(b"-,")
        dev2.ioctl(0)
        dev2.write(b":")
        dev1.write(b"hello-world,miguel-carrasco")
        dev2.write(b"hola:mundo:hehe")
        tokens1, _ = collect_tokens(dev1, logger)
        tokens2, _ = collect_tokens(dev2, logger)
    return (
        tokens1 == [b"hello", b"world", b"miguel", b"carrasco"]
        and tokens2 == [b"hola", b"mundo", b"hehe"]
    )


SCENARIOS = [
    ("Default Separators", default_separators),
    ("Custom Separators", custom_separators),
    ("Non-Cumulative Writes", non_cumulative_writes),
    ("Partial Reads", partial_reads),
    ("NUL Byte Handling", nul_bytes),
    ("NUL Separator", nul_separator),
    ("Empty Write", empty_write),
    ("Multiple Separators", only_separators),
    ("Multiple Instances", multiple_instances),
]


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logger = logging.getLogger("try_scanner")
    failures = 0
    for number, (title, scenario) in enumerate(SCENARIOS, start=1):
        logger.info("Test %d: %s", number, title)
        passed = scenario(logger)
        logger.info("Test %d result: %s", number, "PASS" if passed else "FAIL")
        failures += not passed
    logger.info("%d of %d tests passed", len(SCENARIOS) - failures, len(SCENARIOS))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
