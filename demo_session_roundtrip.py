#!/usr/bin/env python3
"""
Demo: Save an example session to a sexp file and read it back.

Shows the printed form, the JSON/YAML export and the record rebuild.
"""

from wgutil.examples import SESSION_RECORDS, build_example_session
from wgutil.records import restore_records
from wgutil.serialization import form_to_yaml
from wgutil.sexp import print_form, read_form, write_form


def main():
    session = build_example_session(workgroup_count=3)

    print("=" * 80)
    print("SESSION ROUND-TRIP DEMO")
    print("=" * 80)

    print("\nPRINTED FORM:")
    print("-" * 80)
    print(print_form(session))

    filename = "session_example.el"
    write_form(session, filename)
    print(f"\nSaved to: {filename}")

    restored = restore_records(read_form(filename), SESSION_RECORDS)
    print(f"Restored {len(restored.workgroup_list)} workgroups; identical: {restored == session}")

    print("\nYAML EXPORT:")
    print("-" * 80)
    print(form_to_yaml(session))
    print("=" * 80)


if __name__ == "__main__":
    main()
