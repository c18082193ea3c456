"""Grid lab on candles loaded from CSV, with validation and export.

Writes the session state to grid-lab-<symbol>-<date>.json and, if matplotlib is
installed, saves a grid chart to grid_chart.png.
"""

from pathlib import Path

from gridlab import CSVProvider, GridLab, ValidatedProvider
from gridlab.analysis.plots import plot_grid_chart

DATA = Path(__file__).resolve().parent.parent / "tests" / "fixtures" / "LINKUSD_1d.csv"


def main():
    data = ValidatedProvider(CSVProvider(str(DATA), symbol_name="LINKUSD"))
    lab = GridLab({"symbol": "LINKUSD (Coin-M)", "grid_steps": 8, "total_contracts": 100})
    lab.load_candles(data)
    lab.scrub_to(len(lab.candles) - 1)

    print(lab.summary())
    lab.export(Path.cwd())

    try:
        fig = plot_grid_chart(
            lab.candles, lab.levels(), current_price=lab.config.current_price,
            title=lab.config.symbol,
        )
    except ImportError as e:
        print(e)
        return
    fig.savefig("grid_chart.png")


if __name__ == "__main__":
    main()
