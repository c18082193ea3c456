"""Grid lab session on synthetic candles.

Allocates a 12-level geometric grid, seeds a 90-day random walk and
prints the level table plus performance summary. Then switches to ATR
allocation for comparison.
"""

from gridlab import GridLab


def print_levels(lab):
    print(f"  {'lvl':>3}  {'price':>8}  {'contracts':>9}  status")
    for level in lab.levels():
        print(
            f"  {level.level:>3}  {level.price:>8.4f}  {level.contracts:>9}  "
            f"{level.status.value}"
        )


def main():
    lab = GridLab({"range_low": 10, "range_high": 15, "grid_steps": 12})
    lab.seed_candles(seed=13)

    print_levels(lab)
    print(lab.summary())

    lab.configure(alloc_mode="atr", atr_percent=2.5, depth_exponent=1.8)
    print("\nATR allocation:")
    print_levels(lab)
    print(lab.metrics())


if __name__ == "__main__":
    main()
