import pytest

from brokenkayak import pipeline


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(pipeline, "setup_logging", lambda level: None)


@pytest.fixture
def inputs(tmp_path):
    clients = tmp_path / "clients.csv"
    clients.write_text("Doe,Jane,jane@example.com,1 King St,4111,2027-05-31\n", encoding="utf-8")
    flights = tmp_path / "flights.csv"
    flights.write_text(
        "AB1,2024-01-01 10:00,2024-01-01 12:00,Kayak Air,AAA,BBB,200.00\n"
        "BC1,2024-01-01 13:00,2024-01-01 14:00,Kayak Air,BBB,CCC,50.00\n"
        "AC1,2024-01-01 09:00,2024-01-01 15:00,Paddle Jet,AAA,CCC,100.00\n",
        encoding="utf-8",
    )
    return clients, flights


def test_client_lookup(inputs, capsys):
    clients, _ = inputs
    assert pipeline.main_cli(["--clients", str(clients), "--client", "jane@example.com"]) == 0
    assert capsys.readouterr().out == "Doe,Jane,jane@example.com,1 King St,4111,2027-05-31\n"


def test_unknown_client_exits_with_error(inputs, capsys):
    clients, _ = inputs
    assert pipeline.main_cli(["--clients", str(clients), "--client", "who@example.com"]) == 1
    assert capsys.readouterr().out == ""


def test_flights_mode(inputs, capsys):
    _, flights = inputs
    argv = ["--flights", str(flights), "--mode", "flights", "--date", "2024-01-01", "--origin", "AAA",
            "--destination", "CCC"]
    assert pipeline.main_cli(argv) == 0
    assert capsys.readouterr().out == "AC1,2024-01-01 09:00,2024-01-01 15:00,Paddle Jet,AAA,CCC,100.00\n"


def test_itineraries_sorted_by_cost(inputs):
    _, flights = inputs
    text = pipeline.run_query(flights_csv=flights, day="2024-01-01", origin="AAA", destination="CCC", sort="cost")
    assert text.splitlines() == [
        "AC1,2024-01-01 09:00,2024-01-01 15:00,Paddle Jet,AAA,CCC",
        "100.00",
        "06:00",
        "AB1,2024-01-01 10:00,2024-01-01 12:00,Kayak Air,AAA,BBB",
        "BC1,2024-01-01 13:00,2024-01-01 14:00,Kayak Air,BBB,CCC",
        "250.00",
        "04:00",
    ]


def test_itineraries_unsorted_are_blank_line_separated(inputs):
    _, flights = inputs
    text = pipeline.run_query(flights_csv=flights, day="2024-01-01", origin="AAA", destination="CCC")
    assert text.split("\n\n") == [
        "AB1,2024-01-01 10:00,2024-01-01 12:00,Kayak Air,AAA,BBB\n"
        "BC1,2024-01-01 13:00,2024-01-01 14:00,Kayak Air,BBB,CCC\n"
        "250.00\n"
        "04:00",
        "AC1,2024-01-01 09:00,2024-01-01 15:00,Paddle Jet,AAA,CCC\n"
        "100.00\n"
        "06:00\n",
    ]


def test_html_report_is_written(inputs, tmp_path, capsys):
    _, flights = inputs
    report = tmp_path / "out.html"
    argv = ["--flights", str(flights), "--date", "2024-01-01", "--origin", "AAA", "--destination", "CCC",
            "--sort", "time", "--html", str(report)]
    assert pipeline.main_cli(argv) == 0
    assert "itinerary-1" in report.read_text(encoding="utf-8")
    assert "04:00" in capsys.readouterr().out


def test_missing_query_arguments(inputs):
    _, flights = inputs
    assert pipeline.main_cli(["--flights", str(flights), "--origin", "AAA"]) == 1


def test_malformed_flights_file(tmp_path):
    bad = tmp_path / "flights.csv"
    bad.write_text("AB1,2024-01-01 10:00\n", encoding="utf-8")
    argv = ["--flights", str(bad), "--date", "2024-01-01", "--origin", "AAA", "--destination", "CCC"]
    assert pipeline.main_cli(argv) == 1
