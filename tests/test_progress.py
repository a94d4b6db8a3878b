from ui.progress import ConsoleProgress


def test_console_progress_counts_sheets(capsys):
    progress = ConsoleProgress()
    progress.start("Import", 4)
    progress.start_section(0, "PI and Contact")
    progress.complete_section(0)
    progress.start_section(2, "Data Types")
    progress.fail(2, "bad value")
    progress.complete()

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Import: 4 sheets",
        "  [◉] Sheet 1/4: PI and Contact",
        "  [✓] Sheet 1/4: PI and Contact",
        "  [◉] Sheet 3/4: Data Types",
        "  [✗] Sheet 3/4: Data Types (bad value)",
        "[✗] Import complete: 1/4 sheets, 1 skipped",
    ]
    assert progress.completed == {0}
    assert progress.failed == {2: "bad value"}


def test_start_resets_previous_run(capsys):
    progress = ConsoleProgress()
    progress.start("Export", 1)
    progress.start_section(0, "Metadata")
    progress.fail(0, "boom")
    progress.start("Export", 1)
    progress.start_section(0, "Metadata")
    progress.complete_section(0)
    progress.complete()

    assert capsys.readouterr().out.splitlines()[-1] == "[✓] Export complete: 1/1 sheets"
