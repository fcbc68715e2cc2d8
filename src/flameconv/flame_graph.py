"""Import of the collapsed stack format produced by flamegraph.pl.

Every line of the input is a semicolon separated call path, root first,
followed by the number of samples that hit it:

    main;parse;read_line 12
    main;render 3

The profile is converted to the Gecko profile format (version 24) with a
single thread. The input has no timing information, so the samples get
synthetic, unit spaced timestamps in the order they appear.
"""
from dataclasses import dataclass, field

from flameconv.categories import CATEGORIES
from flameconv.configured_logger import logger
from flameconv.errors import MalformedLine
from flameconv.profile_schema import Profile, ProfileMeta
from flameconv.thread_builder import ThreadBuilder

FLAME_GRAPH_FORMAT = "flame-graph"

DIGITS = "0123456789"

# Only the first few malformed line numbers are kept for reporting.
MAX_REPORTED_MALFORMED = 8


@dataclass
class ParsedLine:
    frames: list[str]
    weight: int


@dataclass
class ConversionStats:
    lines: int = 0
    skipped_lines: int = 0
    samples: int = 0
    malformed: list[int] = field(default_factory=list)


def split_line(line: str) -> tuple[str, str] | None:
    """Splits `frames <count>` into its frame path and count.

    Returns None when the line does not have that shape. Trailing whitespace
    (e.g. "\\r") is tolerated. Linear in the length of the line.
    """
    stripped = line.rstrip()
    head = stripped.rstrip(DIGITS)
    count = stripped[len(head):]
    if not count or not head or not head[-1].isspace():
        return None
    frames = head.rstrip()
    if not frames:
        return None
    return frames, count


def is_flame_graph_format(profile: str) -> bool:
    if profile.startswith("{"):
        # Make sure we don't accidentally match JSON
        return False

    # Only look at the first line, the input can be huge.
    end = profile.find("\n")
    first_line = profile if end == -1 else profile[:end]
    return split_line(first_line) is not None


def detect_format(profile: str) -> str | None:
    if is_flame_graph_format(profile):
        return FLAME_GRAPH_FORMAT
    return None


def parse_line(line: str, line_number: int | None = None) -> ParsedLine:
    split = split_line(line)
    if split is None:
        raise MalformedLine(line, line_number)
    frames, count = split
    return ParsedLine(frames=frames.split(";"), weight=int(count))


def _is_blank(line: str) -> bool:
    return line == "" or line.isspace()


class FlameGraphConverter:

    def __init__(self, thread_name: str = "MainThread", pid: int = 0,
                 tid: int = 0):
        self.thread_name = thread_name
        self.pid = pid
        self.tid = tid
        self.stats = ConversionStats()

    def convert(self, profile: str | bytes) -> Profile:
        if isinstance(profile, bytes):
            profile = profile.decode("utf-8", errors="replace")

        self.stats = ConversionStats()
        thread = ThreadBuilder(self.thread_name, self.pid, self.tid)

        for line_number, line in enumerate(profile.split("\n"), start=1):
            if _is_blank(line):
                continue
            self.stats.lines += 1

            try:
                parsed = parse_line(line, line_number)
            except MalformedLine as e:
                logger.warning(str(e))
                self.stats.skipped_lines += 1
                if len(self.stats.malformed) < MAX_REPORTED_MALFORMED:
                    self.stats.malformed.append(line_number)
                continue

            if parsed.weight == 0:
                logger.debug("Ignoring line %d with a zero count",
                             line_number)
                continue

            stack = thread.intern_stack(parsed.frames)
            self.stats.samples += thread.add_samples(stack, parsed.weight)

        logger.info(
            "Converted %d lines into %d samples (%d frames, %d stacks), "
            "skipped %d malformed lines", self.stats.lines,
            self.stats.samples, thread.frame_table.length,
            thread.stack_table.length, self.stats.skipped_lines)

        return Profile(
            meta=ProfileMeta(
                interval=1,
                process_type=0,
                product="Firefox",
                stackwalk=1,
                debug=0,
                gcpoison=0,
                asyncstack=1,
                start_time=0,
                shutdown_time=None,
                version=24,
                presymbolicated=True,
                categories=list(CATEGORIES),
                marker_schema=[],
            ),
            libs=[],
            threads=[thread.finish()],
            processes=[],
            paused_ranges=[],
        )


def convert_flame_graph_profile(profile: str | bytes,
                                thread_name: str = "MainThread") -> Profile:
    """Convert the flamegraph.pl input text format into a Gecko profile."""
    return FlameGraphConverter(thread_name=thread_name).convert(profile)
