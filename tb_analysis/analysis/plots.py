from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from tb_analysis.analysis.mappings import AGE_ORDER, age_label

PALETTE = "Set2"


def _save(fig, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_top_countries_bar(top: pd.DataFrame, output_dir: Path) -> Path:
    """Bar chart of average cases for the top countries (names already shortened)."""
    data = top.copy()
    data["country"] = data["country"].astype(str)
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(x="country", y="average_cases", data=data, hue="country", palette="tab10", legend=False, ax=ax)
    ax.set_title("Average tuberculosis cases: top countries", fontsize=14, fontweight="bold")
    ax.set_xlabel("Country")
    ax.set_ylabel("Average cases")
    ax.tick_params(axis="x", rotation=45)
    return _save(fig, Path(output_dir) / "figure_top_countries_bar.png")


def plot_country_trend(yearly: pd.DataFrame, output_dir: Path) -> Path:
    """Smoothed yearly average cases, one line per country (lowess where there are enough years)."""
    data = yearly.copy()
    data["country"] = data["country"].astype(str)
    countries = sorted(data["country"].unique())
    colors = sns.color_palette("tab10", n_colors=max(len(countries), 1))

    fig, ax = plt.subplots(figsize=(12, 7))
    for color, country in zip(colors, countries):
        sub = data.loc[data["country"] == country].sort_values("year")
        if sub["year"].nunique() >= 4:
            sns.regplot(x="year", y="average_cases", data=sub, lowess=True, scatter=False,
                        color=color, label=country, ax=ax)
        else:
            ax.plot(sub["year"], sub["average_cases"], color=color, label=country)
    ax.set_title("Tuberculosis development in top countries", fontsize=14, fontweight="bold")
    ax.set_xlabel("Year")
    ax.set_ylabel("Average cases")
    if countries:
        ax.legend(title="country", bbox_to_anchor=(1.02, 1), loc="upper left")
    return _save(fig, Path(output_dir) / "figure_top_countries_trend.png")


def plot_age_groups(age_groups: pd.DataFrame, output_dir: Path) -> Path:
    """Bar chart per age bucket with the median of the bucket averages as a dashed red line."""
    data = age_groups.copy()
    data["age"] = data["age"].astype(str)
    order = [a for a in AGE_ORDER if a in set(data["age"])]
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(x="age", y="average_cases", data=data, order=order, hue="age", hue_order=order,
                palette=PALETTE, legend=False, ax=ax)
    if not data.empty:
        ax.axhline(y=data["average_cases"].median(), color="red", linestyle="--", linewidth=1.5, label="median")
        ax.legend(loc="upper left")
    ax.set_xticks(range(len(order)))
    ax.set_xticklabels([age_label(a) for a in order])
    ax.set_title("Average tuberculosis cases by age group", fontsize=14, fontweight="bold")
    ax.set_xlabel("Age group")
    ax.set_ylabel("Average cases")
    return _save(fig, Path(output_dir) / "figure_age_groups_bar.png")
