from typing import Iterable, Optional

from flameconv.categories import categorize_frame, frame_location
from flameconv.errors import SchemaInvariantViolation
from flameconv.profile_schema import (FRAME_SCHEMA, STACK_SCHEMA,
                                      SAMPLES_SCHEMA, FrameTable,
                                      RawMarkerTable, SamplesTable,
                                      StackTable, StringTableBuilder, Thread)

StackKey = tuple[Optional[int], int]


class ThreadBuilder:
    """Accumulates the tables of one thread while samples are added.

    Frames are deduplicated by their raw label and stacks by their
    (prefix, frame) pair, so a call path shared by many samples is stored
    once as a chain of stack rows. Every table is append-only.
    """

    def __init__(self, name: str, pid: int, tid: int):
        self.name = name
        self.pid = pid
        self.tid = tid
        self.strings = StringTableBuilder()
        self.frame_table = FrameTable()
        self.stack_table = StackTable()
        self.samples = SamplesTable()
        self.markers = RawMarkerTable()
        self._frame_map: dict[str, int] = {}
        self._stack_map: dict[StackKey, int] = {}
        self._time = 0

    def get_or_create_frame(self, raw_label: str) -> int:
        frame = self._frame_map.get(raw_label)
        if frame is None:
            location = self.strings.insert(frame_location(raw_label))
            frame = self.frame_table.add_frame(location,
                                               categorize_frame(raw_label))
            self._frame_map[raw_label] = frame
        return frame

    def get_or_create_stack(self, frame: int, prefix: Optional[int]) -> int:
        key = (prefix, frame)
        stack = self._stack_map.get(key)
        if stack is None:
            stack = self.stack_table.add_stack(prefix, frame)
            self._stack_map[key] = stack
        return stack

    def intern_stack(self, frames: Iterable[str]) -> Optional[int]:
        # The first frame is the root of the call path, the last one the leaf.
        prefix = None
        for raw_label in frames:
            frame = self.get_or_create_frame(raw_label)
            prefix = self.get_or_create_stack(frame, prefix)
        return prefix

    def add_samples(self, stack: int, count: int) -> int:
        # There is no timing information in the input, so every sample gets
        # the next tick of a counter shared by the whole thread and there is
        # no latency at all in processing events.
        for _ in range(count):
            self.samples.add_sample(stack, self._time, 0)
            self._time += 1
        return max(count, 0)

    def validate(self):
        num_strings = len(self.strings)
        num_frames = self.frame_table.length
        num_stacks = self.stack_table.length

        location_column = FRAME_SCHEMA["location"]
        for index, row in enumerate(self.frame_table.data):
            location = row[location_column]
            if not 0 <= location < num_strings:
                raise SchemaInvariantViolation(
                    f"frame {index} references missing string {location}")

        prefix_column = STACK_SCHEMA["prefix"]
        frame_column = STACK_SCHEMA["frame"]
        for index, row in enumerate(self.stack_table.data):
            prefix = row[prefix_column]
            frame = row[frame_column]
            # Prefixes always point backwards, which also rules out cycles.
            if prefix is not None and not 0 <= prefix < index:
                raise SchemaInvariantViolation(
                    f"stack {index} has invalid prefix {prefix}")
            if not 0 <= frame < num_frames:
                raise SchemaInvariantViolation(
                    f"stack {index} references missing frame {frame}")

        stack_column = SAMPLES_SCHEMA["stack"]
        time_column = SAMPLES_SCHEMA["time"]
        for index, row in enumerate(self.samples.data):
            stack = row[stack_column]
            if not 0 <= stack < num_stacks:
                raise SchemaInvariantViolation(
                    f"sample {index} references missing stack {stack}")
            if row[time_column] != index:
                raise SchemaInvariantViolation(
                    f"sample {index} has time {row[time_column]}")

    def finish(self) -> Thread:
        self.validate()
        return Thread(
            name=self.name,
            pid=self.pid,
            tid=self.tid,
            process_type="default",
            register_time=0,
            unregister_time=None,
            samples=self.samples,
            markers=self.markers,
            stack_table=self.stack_table,
            frame_table=self.frame_table,
            string_table=self.strings.strings,
        )
