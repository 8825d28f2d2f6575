import matplotlib

matplotlib.use("Agg")

import numpy as np

from paint_graph.main import build_demo, main, plot_colored_graph
from paint_graph.session import GraphSession


def test_demo_graph_has_chromatic_number_three():
    session = GraphSession()
    build_demo(session)
    assert session.colorize() == 3


def test_plot_colored_graph_writes_file(tmp_path):
    out = tmp_path / "figs" / "triangle.png"
    points = np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 80.0]])
    plot_colored_graph(points, [(0, 1), (1, 2), (0, 2)], [0, 1, None], title="triangle", save_path=str(out))
    assert out.exists()


def test_main_on_demo(tmp_path, capsys):
    graph_out = tmp_path / "demo.txt"
    fig_out = tmp_path / "demo.png"
    assert main(["--save-graph", str(graph_out), "--save-figure", str(fig_out)]) == 0
    out = capsys.readouterr().out
    assert "Chromatic number: 3" in out
    assert graph_out.read_text().startswith("Node: {0}")
    assert fig_out.exists()


def test_main_reads_graph_file(tmp_path, capsys):
    path = tmp_path / "square.txt"
    path.write_text(
        "Node: {0} (0.0, 0.0) [{1}, {3}]\n"
        "Node: {1} (100.0, 0.0) [{0}, {2}]\n"
        "Node: {2} (100.0, 100.0) [{1}, {3}]\n"
        "Node: {3} (0.0, 100.0) [{0}, {2}]\n"
    )
    assert main([str(path), "--max-states", "0"]) == 0
    assert "Chromatic number: 2" in capsys.readouterr().out


def test_main_reports_format_error(tmp_path, capsys):
    path = tmp_path / "broken.txt"
    path.write_text("Node: {0} oops\n")
    assert main([str(path)]) == 1
    assert "error:" in capsys.readouterr().err
