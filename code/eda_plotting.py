# -*- coding: utf-8 -*-
"""
Created on Wed Dec 17 16:35:17 2025

@author: epicx

EDA plotting for the enriched Seattle counter readings.

Usage (from repo root):

    python code/eda_plotting.py --input data/processed/counter_readings_enriched.parquet
    python code/eda_plotting.py --input data/processed/counter_readings_enriched.parquet --save-plots

If --save-plots is set, figures are written to <PROJECT_ROOT>/plots.

Missing counts are always treated as 0 when summing. Rows are only dropped by
plots that need a weather/case value, and only where that value is missing.
"""

from pathlib import Path
import argparse
import calendar

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt

from config import PLOTS_DIR, PROCESSED_DIR, CHOP_START, CHOP_END

# ---------------------------------------------------------------------------
# Config / defaults
# ---------------------------------------------------------------------------

DEFAULT_INPUT = PROCESSED_DIR / "counter_readings_enriched.parquet"

COUNT_COL = "count"
PRECIP_COL = "precipitation"
TEMP_COL = "temp_avg"
CASES_COL = "new_cases"

DEFAULT_CORR_COLS = [
    "total_count",
    "bike_count",
    "pedestrian_count",
    TEMP_COL,
    PRECIP_COL,
    CASES_COL,
]

DAY_COLOR_MAP = {
    "Monday": "tab:blue",
    "Tuesday": "tab:orange",
    "Wednesday": "tab:green",
    "Thursday": "tab:red",
    "Friday": "tab:purple",
    "Saturday": "tab:brown",
    "Sunday": "tab:pink",
}

TRANSIT_COLOR_MAP = {
    "bike": "tab:blue",
    "pedestrian": "tab:orange",
}

RELATIVE_COLOR_MAP = {
    "Towards": "tab:green",
    "Away": "tab:red",
}

# Precip buckets in inches: 0, (0,0.1], (0.1,0.25], (0.25,0.5], (0.5,1], (1,∞]
PRECIP_EDGES = [0, 0.1, 0.25, 0.5, 1.0, np.inf]
PRECIP_LABELS = ["(0,0.1]", "(0.1,0.25]", "(0.25,0.5]", "(0.5,1]", "(1,∞]"]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _ensure_out_dir(out_dir: Path | str) -> Path:
    """
    Ensure output directory exists; accept either Path or string.
    """
    if isinstance(out_dir, str):
        out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def _read_input(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix == ".parquet":
        df = pd.read_parquet(path)
    elif path.suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported file extension: {path.suffix}")

    return df


def _finish(fig, save: bool, out_dir: Path | None, filename: str) -> Path | None:
    """Save to out_dir (default PLOTS_DIR) or show, then close."""
    out_path = None
    if save:
        if out_dir is None:
            out_dir = PLOTS_DIR
        out_dir = _ensure_out_dir(out_dir)
        out_path = out_dir / filename
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
    else:
        plt.show()
    plt.close(fig)
    return out_path


def _counts(df: pd.DataFrame) -> pd.Series:
    return df[COUNT_COL].fillna(0)


def daily_totals(df: pd.DataFrame, by: str | None = None) -> pd.DataFrame:
    """
    Sum counts per day (optionally per `by`). Missing counts count as 0.
    """
    keys = ["date"] if by is None else ["date", by]
    out = (
        df.assign(**{COUNT_COL: _counts(df)})
        .groupby(keys, as_index=False)[COUNT_COL]
        .sum()
    )
    out["date"] = pd.to_datetime(out["date"])
    return out.sort_values(keys).reset_index(drop=True)


def build_daily_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per day: total/bike/pedestrian counts plus whatever daily
    covariates are present (temp_avg, precipitation, cases, new_cases).
    """
    daily = daily_totals(df).rename(columns={COUNT_COL: "total_count"})

    if "transitType" in df.columns:
        typed = df[df["transitType"].isin(TRANSIT_COLOR_MAP)]
        by_type = daily_totals(typed, by="transitType").pivot(
            index="date", columns="transitType", values=COUNT_COL
        )
        by_type.columns = [f"{c}_count" for c in by_type.columns]
        daily = daily.merge(by_type.reset_index(), on="date", how="left")

    covar_cols = [c for c in (TEMP_COL, PRECIP_COL, "cases", CASES_COL) if c in df.columns]
    if covar_cols:
        covars = df.groupby("date", as_index=False)[covar_cols].first()
        covars["date"] = pd.to_datetime(covars["date"])
        daily = daily.merge(covars, on="date", how="left")

    return daily


def make_precip_buckets(s: pd.Series) -> pd.Series:
    """Return categorical precip buckets: '0', '(0,0.1]', ..., '(1,∞]'. NaN stays NaN."""
    bucket = pd.Series(pd.NA, index=s.index, dtype="object")
    valid = s.notna()

    pos_mask = valid & (s > 0)
    bucket[valid & (s <= 0)] = "0"
    bucket[pos_mask] = pd.cut(
        s[pos_mask], bins=PRECIP_EDGES, labels=PRECIP_LABELS, right=True
    ).astype(str)
    return bucket


# ---------------------------------------------------------------------------
# Plotting functions
# ---------------------------------------------------------------------------

def plot_daily_counts_over_time(
    df: pd.DataFrame,
    by: str | None = "crossing",
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """
    Daily totals with a 7-day moving average, CHAZ/CHOP window shaded.
    """
    if df.empty:
        print("No readings; skipping daily counts plot.")
        return None

    if by is not None and by not in df.columns:
        by = None

    fig, ax = plt.subplots(figsize=(14, 5.5))

    if by is None:
        daily = daily_totals(df)
        ax.plot(daily["date"], daily[COUNT_COL], linewidth=0.7, alpha=0.45, label="daily")
        ax.plot(
            daily["date"],
            daily[COUNT_COL].rolling(window=7, min_periods=1).mean(),
            linewidth=1.6,
            color="darkred",
            label="7-day MA",
        )
    else:
        daily = daily_totals(df, by=by)
        for name, grp in daily.groupby(by):
            ax.plot(
                grp["date"],
                grp[COUNT_COL].rolling(window=7, min_periods=1).mean(),
                linewidth=1.2,
                label=f"{name} (7-day MA)",
            )

    ax.axvspan(pd.Timestamp(CHOP_START), pd.Timestamp(CHOP_END),
               color="grey", alpha=0.25, label="CHAZ/CHOP")

    ax.set_title("Daily counts over time")
    ax.set_xlabel("Date")
    ax.set_ylabel("Count")
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize=8)
    fig.autofmt_xdate()

    return _finish(fig, save, out_dir, "time_daily_counts.png")


def plot_counts_by_year_month(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Monthly totals, one bar group per month and one bar per year."""
    if "year" not in df.columns or "month" not in df.columns:
        print("Missing year/month; skipping monthly totals plot.")
        return None

    monthly = (
        df.assign(**{COUNT_COL: _counts(df)})
        .dropna(subset=["year", "month"])
        .groupby(["month", "year"])[COUNT_COL]
        .sum()
        .unstack("year")
        .reindex(range(1, 13), fill_value=0)
        .fillna(0)
    )
    if monthly.empty or monthly.shape[1] == 0:
        print("No monthly totals; skipping.")
        return None

    n_years = monthly.shape[1]
    width = 0.8 / n_years

    fig, ax = plt.subplots(figsize=(14, 5))
    for i, year in enumerate(monthly.columns):
        ax.bar(monthly.index + (i - n_years / 2) * width + width / 2,
               monthly[year].values, width=width, label=str(int(year)))

    ax.set_xticks(range(1, 13))
    ax.set_xticklabels([calendar.month_abbr[m] for m in range(1, 13)])
    ax.set_title("Total counts by month")
    ax.set_ylabel("Total count")
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(title="Year", fontsize=8, ncol=2)

    return _finish(fig, save, out_dir, "bar_counts_by_month.png")


def plot_hourly_profile_by_weekday(
    df: pd.DataFrame,
    transit_type: str | None = "bike",
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """
    Average count per hour of day, one line per weekday.
    Average = total for (weekday, hour) / number of distinct dates of that weekday.
    """
    if "hour" not in df.columns or "weekday" not in df.columns:
        print("Missing hour/weekday; skipping hourly profile plot.")
        return None

    sub = df if transit_type is None else df[df["transitType"] == transit_type]
    if sub.empty:
        print(f"No {transit_type} readings; skipping hourly profile plot.")
        return None

    totals = (
        sub.assign(**{COUNT_COL: _counts(sub)})
        .groupby(["weekday", "hour"])[COUNT_COL]
        .sum()
    )
    n_days = sub.groupby("weekday")["date"].nunique()
    avg = totals.div(n_days, level="weekday")

    fig, ax = plt.subplots(figsize=(12, 5))
    for day, color in DAY_COLOR_MAP.items():
        if day not in avg.index.get_level_values("weekday"):
            continue
        s = avg.loc[day].reindex(range(24), fill_value=0)
        ax.plot(s.index, s.values, color=color, label=day)

    ax.set_xticks(range(24))
    ax.set_xlabel("Hour of day (0–23)")
    ax.set_ylabel("Average count")
    ax.set_title(f"Average hourly profile by weekday ({transit_type or 'all'})")
    ax.grid(True, alpha=0.3)
    ax.legend()

    return _finish(fig, save, out_dir, f"line_hourly_profile_{transit_type or 'all'}.png")


def plot_relative_direction_by_hour(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Total counts per hour, towards vs away from the city center."""
    if "relativeDirection" not in df.columns or "hour" not in df.columns:
        print("Missing relativeDirection/hour; skipping towards/away plot.")
        return None

    grouped = (
        df.assign(**{COUNT_COL: _counts(df)})
        .groupby(["hour", "relativeDirection"])[COUNT_COL]
        .sum()
        .unstack("relativeDirection")
        .reindex(range(24), fill_value=0)
        .fillna(0)
    )

    fig, ax = plt.subplots(figsize=(12, 5))
    for rel, color in RELATIVE_COLOR_MAP.items():
        if rel in grouped.columns:
            ax.plot(grouped.index, grouped[rel], color=color, marker="o", label=rel)

    ax.set_xticks(range(24))
    ax.set_xlabel("Hour of day (0–23)")
    ax.set_ylabel("Total count")
    ax.set_title("Towards vs away from the city center, by hour")
    ax.grid(True, alpha=0.3)
    ax.legend()

    return _finish(fig, save, out_dir, "line_towards_away_by_hour.png")


def transit_totals_by_crossing(df: pd.DataFrame) -> pd.DataFrame:
    """Crossing x transitType count totals; readings with no transit type go under 'unknown'."""
    return (
        df.assign(**{COUNT_COL: _counts(df), "transitType": df["transitType"].fillna("unknown")})
        .groupby(["crossing", "transitType"])[COUNT_COL]
        .sum()
        .unstack("transitType")
        .fillna(0)
    )


def plot_transit_type_by_crossing(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Stacked bars: bike vs pedestrian totals per crossing."""
    if "transitType" not in df.columns:
        print("Missing transitType; skipping transit type plot.")
        return None

    grouped = transit_totals_by_crossing(df)
    if grouped.empty:
        print("No readings; skipping transit type plot.")
        return None

    fig, ax = plt.subplots(figsize=(12, 5))
    bottom = np.zeros(len(grouped))
    for transit in grouped.columns:
        ax.bar(grouped.index, grouped[transit].values, bottom=bottom,
               color=TRANSIT_COLOR_MAP.get(transit), label=transit)
        bottom += grouped[transit].values

    ax.set_title("Bike vs pedestrian totals by crossing")
    ax.set_ylabel("Total count")
    ax.tick_params(axis="x", rotation=30)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend()

    return _finish(fig, save, out_dir, "bar_transit_type_by_crossing.png")


def plot_counts_vs_weather(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> list:
    """Scatter of daily totals vs temperature and vs precipitation."""
    daily = build_daily_table(df)
    paths = []

    for x_col, xlabel in ((TEMP_COL, "Average temperature (°F)"),
                          (PRECIP_COL, "Precipitation (in)")):
        if x_col not in daily.columns:
            print(f"Skipping scatter total_count vs {x_col}: column missing.")
            continue

        sub = daily[["total_count", x_col]].dropna()
        if sub.empty:
            print(f"Skipping scatter total_count vs {x_col}: no matched days.")
            continue

        fig, ax = plt.subplots(figsize=(6, 5))
        ax.scatter(sub[x_col], sub["total_count"], alpha=0.4)
        ax.set_title(f"Daily total vs {x_col}")
        ax.set_xlabel(xlabel)
        ax.set_ylabel("Daily total count")
        ax.grid(True, alpha=0.3)

        paths.append(_finish(fig, save, out_dir, f"scatter_total_count_vs_{x_col}.png"))

    return paths


def plot_precip_distributions(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Days per precipitation bucket and mean daily total per bucket."""
    daily = build_daily_table(df)
    if PRECIP_COL not in daily.columns:
        print("No precip column found; skipping precip distribution plots.")
        return None

    daily = daily.dropna(subset=[PRECIP_COL])
    if daily.empty:
        print("No days with precipitation data; skipping precip distribution plots.")
        return None

    daily["precip_bucket"] = make_precip_buckets(daily[PRECIP_COL])
    order = ["0"] + PRECIP_LABELS

    days_by_bucket = daily["precip_bucket"].value_counts().reindex(order, fill_value=0)
    mean_by_bucket = daily.groupby("precip_bucket")["total_count"].mean().reindex(order)

    fig, (ax1, ax2) = plt.subplots(ncols=2, figsize=(14, 4.5))

    ax1.bar(order, days_by_bucket.values)
    ax1.set_title("Days by precipitation bucket")
    ax1.set_xlabel("Precipitation bucket (in)")
    ax1.set_ylabel("Number of days")
    ax1.tick_params(axis="x", rotation=45)
    ax1.grid(True, axis="y", alpha=0.3)

    ax2.bar(order, mean_by_bucket.fillna(0).values, color="tab:orange")
    ax2.set_title("Mean daily total by precipitation bucket")
    ax2.set_xlabel("Precipitation bucket (in)")
    ax2.set_ylabel("Mean daily total")
    ax2.tick_params(axis="x", rotation=45)
    ax2.grid(True, axis="y", alpha=0.3)

    median_precip = daily.loc[daily[PRECIP_COL] > 0, PRECIP_COL].median()
    if pd.notna(median_precip):
        fig.suptitle(f"Median precipitation on wet days ≈ {median_precip:.2f} in")

    fig.tight_layout()
    return _finish(fig, save, out_dir, "bar_precip_buckets.png")


def plot_counts_vs_cases(
    df: pd.DataFrame,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Daily totals (7-day MA) vs 7-day average new cases, twin y-axes."""
    daily = build_daily_table(df)
    if CASES_COL not in daily.columns:
        print("No case column found; skipping counts vs cases plot.")
        return None

    daily = daily.dropna(subset=[CASES_COL])
    if daily.empty:
        print("No days with case data; skipping counts vs cases plot.")
        return None

    fig, ax1 = plt.subplots(figsize=(14, 5.5))

    ax1.plot(daily["date"], daily["total_count"].rolling(7, min_periods=1).mean(),
             color="tab:blue", linewidth=1.5, label="Daily total (7-day MA)")
    ax1.set_xlabel("Date")
    ax1.set_ylabel("Daily total count")

    ax2 = ax1.twinx()
    ax2.plot(daily["date"], daily[CASES_COL].rolling(7, min_periods=1).mean(),
             color="tab:red", linewidth=1.5, label="New cases (7-day avg)")
    ax2.set_ylabel("New cases")

    ax1.axvspan(pd.Timestamp(CHOP_START), pd.Timestamp(CHOP_END), color="grey", alpha=0.25)

    lines = ax1.get_lines() + ax2.get_lines()
    ax1.legend(lines, [ln.get_label() for ln in lines], loc="upper left")
    ax1.set_title("Counter totals vs COVID-19 cases")
    fig.autofmt_xdate()
    fig.tight_layout()

    return _finish(fig, save, out_dir, "time_counts_vs_cases.png")


def plot_corr_heatmap(
    df: pd.DataFrame,
    cols=None,
    save: bool = False,
    out_dir: Path | None = None,
) -> Path | None:
    """Correlation matrix heatmap of the daily table."""
    if cols is None:
        cols = DEFAULT_CORR_COLS

    daily = build_daily_table(df)
    cols = [c for c in cols if c in daily.columns]
    if len(cols) < 2:
        print("Fewer than 2 correlation columns found; skipping correlation heatmap.")
        return None

    corr = daily[cols].corr()

    fig, ax = plt.subplots(figsize=(0.8 * len(cols) + 3, 0.8 * len(cols) + 3))
    im = ax.imshow(corr, vmin=-1, vmax=1)

    ax.set_xticks(range(len(cols)))
    ax.set_yticks(range(len(cols)))
    ax.set_xticklabels(cols, rotation=45, ha="right")
    ax.set_yticklabels(cols)

    for i in range(len(cols)):
        for j in range(len(cols)):
            val = corr.iloc[i, j]
            if pd.notna(val):
                ax.text(j, i, f"{val:.2f}", ha="center", va="center", fontsize=8)

    ax.set_title("Correlation matrix (daily)")
    fig.colorbar(im, ax=ax, shrink=0.8)
    fig.tight_layout()

    return _finish(fig, save, out_dir, "corr_matrix.png")


def run_eda(
    input_path: Path,
    save_plots: bool = False,
    out_dir: Path | None = None,
) -> None:
    df = _read_input(input_path)
    run_eda_frame(df, save_plots=save_plots, out_dir=out_dir)


def run_eda_frame(
    df: pd.DataFrame,
    save_plots: bool = False,
    out_dir: Path | None = None,
) -> None:
    plot_daily_counts_over_time(df, save=save_plots, out_dir=out_dir)
    plot_counts_by_year_month(df, save=save_plots, out_dir=out_dir)
    plot_hourly_profile_by_weekday(df, transit_type="bike", save=save_plots, out_dir=out_dir)
    plot_hourly_profile_by_weekday(df, transit_type="pedestrian", save=save_plots, out_dir=out_dir)
    plot_relative_direction_by_hour(df, save=save_plots, out_dir=out_dir)
    plot_transit_type_by_crossing(df, save=save_plots, out_dir=out_dir)
    plot_counts_vs_weather(df, save=save_plots, out_dir=out_dir)
    plot_precip_distributions(df, save=save_plots, out_dir=out_dir)
    plot_counts_vs_cases(df, save=save_plots, out_dir=out_dir)
    plot_corr_heatmap(df, save=save_plots, out_dir=out_dir)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="EDA plotting for enriched counter readings.")

    parser.add_argument(
        "--input",
        default=str(DEFAULT_INPUT),
        help="Path to input dataframe (.parquet or .csv). "
             "Defaults to data/processed/counter_readings_enriched.parquet.",
    )
    parser.add_argument(
        "--save-plots",
        action="store_true",
        help="If set, save plots to <PROJECT_ROOT>/plots instead of showing them.",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Optional override for output directory. "
             "If omitted and --save-plots is set, defaults to <PROJECT_ROOT>/plots.",
    )

    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    input_path = Path(args.input)
    out_dir = Path(args.out_dir) if args.out_dir else None

    run_eda(input_path=input_path, save_plots=args.save_plots, out_dir=out_dir)
    print(f"EDA complete for: {input_path}")


if __name__ == "__main__":
    main()
