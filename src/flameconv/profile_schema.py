from dataclasses import dataclass, field
import json

# Row layouts of the Gecko profile format, version 24. Every table is
# serialized as {"schema": {column: index}, "data": [row, ...]}.
SAMPLES_SCHEMA = {
    "stack": 0,
    "time": 1,
    "responsiveness": 2,
}

FRAME_SCHEMA = {
    "location": 0,
    "relevantForJS": 1,
    "innerWindowID": 2,
    "implementation": 3,
    "optimizations": 4,
    "line": 5,
    "column": 6,
    "category": 7,
    "subcategory": 8,
}

STACK_SCHEMA = {
    "prefix": 0,
    "frame": 1,
}

MARKER_SCHEMA = {
    "name": 0,
    "startTime": 1,
    "endTime": 2,
    "phase": 3,
    "category": 4,
    "data": 5,
}

SampleRow = list
FrameRow = list
StackRow = list


@dataclass
class StringTableBuilder:
    strings: list[str] = field(default_factory=list)
    existing: dict[str, int] = field(default_factory=dict)

    def insert(self, string: str) -> int:
        if string in self.existing:
            return self.existing[string]
        index = len(self.strings)
        self.strings.append(string)
        self.existing[string] = index
        return index

    def get(self, index: int) -> str:
        return self.strings[index]

    def __len__(self):
        return len(self.strings)


@dataclass
class SamplesTable:
    data: list[SampleRow] = field(default_factory=list)

    def add_sample(self, stack: int, time: int, responsiveness: int = 0):
        self.data.append([stack, time, responsiveness])

    @property
    def length(self):
        return len(self.data)

    def json(self):
        return {
            "schema": dict(SAMPLES_SCHEMA),
            "data": self.data,
        }


@dataclass
class StackTable:
    data: list[StackRow] = field(default_factory=list)

    def add_stack(self, prefix: int | None, frame: int) -> int:
        index = len(self.data)
        self.data.append([prefix, frame])
        return index

    @property
    def length(self):
        return len(self.data)

    def json(self):
        return {
            "schema": dict(STACK_SCHEMA),
            "data": self.data,
        }


@dataclass
class FrameTable:
    data: list[FrameRow] = field(default_factory=list)

    def add_frame(self, location: int, category: int) -> int:
        # We know nothing about the frame beyond its label, so every other
        # column gets the "unknown" value of the format.
        index = len(self.data)
        self.data.append([
            location,
            False,  # relevantForJS
            0,  # innerWindowID
            None,  # implementation
            None,  # optimizations
            None,  # line
            None,  # column
            category,
            None,  # subcategory
        ])
        return index

    @property
    def length(self):
        return len(self.data)

    def json(self):
        return {
            "schema": dict(FRAME_SCHEMA),
            "data": self.data,
        }


@dataclass
class RawMarkerTable:
    data: list[list] = field(default_factory=list)

    @property
    def length(self):
        return len(self.data)

    def json(self):
        return {
            "schema": dict(MARKER_SCHEMA),
            "data": self.data,
        }


@dataclass
class Category:
    name: str = field(default_factory=str)
    color: str = field(default_factory=str)
    subcategories: list[str] = field(default_factory=list)

    def json(self):
        return {
            "name": self.name,
            "color": self.color,
            "subcategories": list(self.subcategories)
        }


@dataclass
class ProfileMeta:
    interval: int = 1
    process_type: int = field(default_factory=int)
    product: str = "Firefox"
    stackwalk: int = 1
    debug: int = 0
    gcpoison: int = 0
    asyncstack: int = 1
    start_time: int = field(default_factory=int)
    shutdown_time: int | None = None
    version: int = 24
    presymbolicated: bool = True
    categories: list[Category] = field(default_factory=list)
    marker_schema: list[dict] = field(default_factory=list)

    def json(self):
        return {
            "interval": self.interval,
            "processType": self.process_type,
            "product": self.product,
            "stackwalk": self.stackwalk,
            "debug": self.debug,
            "gcpoison": self.gcpoison,
            "asyncstack": self.asyncstack,
            "startTime": self.start_time,
            "shutdownTime": self.shutdown_time,
            "version": self.version,
            "presymbolicated": self.presymbolicated,
            "categories": [c.json() for c in self.categories],
            "markerSchema": list(self.marker_schema),
        }


@dataclass
class Thread:
    name: str = field(default_factory=str)
    pid: int = field(default_factory=int)
    tid: int = field(default_factory=int)
    process_type: str = "default"
    register_time: int = field(default_factory=int)
    unregister_time: int | None = None
    samples: SamplesTable = field(default_factory=SamplesTable)
    markers: RawMarkerTable = field(default_factory=RawMarkerTable)
    stack_table: StackTable = field(default_factory=StackTable)
    frame_table: FrameTable = field(default_factory=FrameTable)
    string_table: list[str] = field(default_factory=list)

    def json(self):
        return {
            "tid": self.tid,
            "pid": self.pid,
            "name": self.name,
            "markers": self.markers.json(),
            "samples": self.samples.json(),
            "frameTable": self.frame_table.json(),
            "stackTable": self.stack_table.json(),
            "stringTable": self.string_table,
            "registerTime": self.register_time,
            "unregisterTime": self.unregister_time,
            "processType": self.process_type,
        }


@dataclass
class Profile:
    meta: ProfileMeta = field(default_factory=ProfileMeta)
    libs: list = field(default_factory=list)
    threads: list[Thread] = field(default_factory=list)
    processes: list = field(default_factory=list)
    paused_ranges: list = field(default_factory=list)

    def json(self):
        return {
            "meta": self.meta.json(),
            "libs": list(self.libs),
            "threads": [t.json() for t in self.threads],
            "processes": list(self.processes),
            "pausedRanges": list(self.paused_ranges),
        }

    def dumps(self, indent: int | None = None) -> str:
        return json.dumps(self.json(), indent=indent)
