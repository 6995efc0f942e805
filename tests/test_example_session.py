"""
Test the example session built from the "wg" record families.

Validates that a session of records, alists and symbols survives a
write/read through a sexp file unchanged.
"""

from wgutil import alist
from wgutil.examples import SESSION_RECORDS, build_example_session, workgroup_record
from wgutil.forms import Symbol
from wgutil.records import restore_records
from wgutil.sexp import read_form, write_form


def test_example_session_structure():
    session = build_example_session(workgroup_count=3)

    assert len(session.workgroup_list) == 3
    first = session.workgroup_list[0]
    assert workgroup_record.is_instance(first)
    assert first.name == "workgroup-1"
    assert alist.keys(first.parameters)[0] == Symbol("index")
    assert alist.get(first.parameters, Symbol("split-ratio")) == 0.5
    assert len(session.workgroup_list[2].buffer_uids) == 3

    uids = [wg.uid for wg in session.workgroup_list] + [session.uid]
    assert len(set(uids)) == len(uids)


def test_example_session_file_roundtrip(tmp_path):
    session = build_example_session(workgroup_count=3)
    path = write_form(session, tmp_path / "session.el")
    restored = restore_records(read_form(path), SESSION_RECORDS)
    assert restored == session
