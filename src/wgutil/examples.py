"""
Example session records for demos and tests.

Declares a small "wg" record family set (session, workgroup, buffer)
in its own registry and builds a session of N workgroups that exercises
records, alists, symbols and nested lists together.
"""
from wgutil.alist import make_alist, put
from wgutil.b36 import make_uid
from wgutil.forms import Symbol
from wgutil.records import RecordRegistry, define_record


SESSION_RECORDS = RecordRegistry()

session_record = define_record(
    "wg", "session",
    "uid", "file_name", ("version", "1.0"), ("workgroup_list", []), ("parameters", []),
    registry=SESSION_RECORDS,
)
workgroup_record = define_record(
    "wg", "workgroup",
    "uid", "name", ("dirty", False), ("buffer_uids", []), ("parameters", []),
    registry=SESSION_RECORDS,
)
buffer_record = define_record(
    "wg", "buf",
    "uid", "name", "file_name", ("major_mode", Symbol("fundamental-mode")), ("point", 1),
    registry=SESSION_RECORDS,
)


def build_example_session(workgroup_count: int = 3, now: float = 1_700_000_000.25):
    counter = 0

    def next_uid() -> str:
        nonlocal counter
        counter += 1
        return make_uid(counter, now)

    buffers = [
        buffer_record.make(uid=next_uid(), name="*scratch*", major_mode=Symbol("lisp-interaction-mode")),
        buffer_record.make(uid=next_uid(), name="init.el", file_name="/home/user/.emacs.d/init.el",
                           major_mode=Symbol("emacs-lisp-mode"), point=120),
        buffer_record.make(uid=next_uid(), name="notes.org", file_name="/home/user/notes.org",
                           major_mode=Symbol("org-mode")),
    ]

    workgroups = []
    for i in range(1, workgroup_count + 1):
        parameters = make_alist(Symbol("layout"), Symbol("vertical"), Symbol("split-ratio"), 0.5)
        parameters = put(parameters, Symbol("index"), i)
        workgroups.append(workgroup_record.make(
            uid=next_uid(),
            name=f"workgroup-{i}",
            buffer_uids=[b.uid for b in buffers[:i]],
            parameters=parameters,
        ))

    return session_record.make(
        uid=next_uid(),
        file_name="/home/user/.emacs_workgroups",
        workgroup_list=workgroups,
        parameters=make_alist(Symbol("buffers"), buffers),
    )
