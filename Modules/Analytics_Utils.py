import pandas as pd
import streamlit as st
import plotly.express as px
from Modules.theme_config import CUSTOM_THEME


def records_to_df(records, columns=None):
    """Builds a DataFrame from a list of dicts, empty when there is nothing to show"""
    if not records:
        return pd.DataFrame(columns=columns or [])
    df = pd.DataFrame(records)
    return df[columns] if columns else df


def safe_bar_chart(df, index_col, value_col, title="", theme=CUSTOM_THEME, horizontal=False):
    """Bar chart using a consistent custom theme"""
    if not df.empty and index_col in df.columns and value_col in df.columns:
        if title:
            st.subheader(title)

        df_sorted = df.sort_values(value_col, ascending=horizontal).reset_index(drop=True)
        df_sorted[index_col] = df_sorted[index_col].astype(str)

        fig = px.bar(
            df_sorted,
            x=value_col if horizontal else index_col,
            y=index_col if horizontal else value_col,
            orientation="h" if horizontal else "v",
            text=value_col,
            color=index_col,
            color_discrete_sequence=theme["color_sequence"],
            labels={index_col: index_col.replace("_", " ").capitalize(),
                    value_col: value_col.replace("_", " ").capitalize()},
            template=theme["template"]
        )

        fig.update_traces(textposition="outside")
        fig.update_xaxes(
            title_font=dict(color=theme["axis_color"]),
            tickfont=dict(color=theme["axis_color"])
        )
        fig.update_yaxes(
            title_font=dict(color=theme["axis_color"]),
            tickfont=dict(color=theme["axis_color"])
        )
        fig.update_layout(
            font=dict(family=theme["font_family"], color=theme["font_color"]),
            showlegend=False,
            margin=dict(l=20, r=20, t=20, b=40),
            height=max(400, 28 * len(df_sorted)) if horizontal else 400
        )

        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info(f"No data available for {title.lower() or value_col}.")


def safe_metric(label, value, decimals=2, help=None):
    """Prints a metric, handling None safely"""
    if value is None:
        st.metric(label, "N/A", help=help)
    elif isinstance(value, float):
        st.metric(label, round(value, decimals), help=help)
    elif isinstance(value, int):
        st.metric(label, f"{value:,}", help=help)
    else:
        st.metric(label, value, help=help)


def stat_card(label, value, subtitle, decimals=1):
    safe_metric(label, value, decimals=decimals)
    st.caption(subtitle)


def safe_pie_chart(df, names_col, values_col, title="", theme=CUSTOM_THEME):
    if not df.empty and names_col in df.columns and values_col in df.columns:
        st.subheader(title)
        fig = px.pie(df, names=names_col, values=values_col,
                     color_discrete_sequence=theme["color_sequence"], template=theme["template"])
        fig.update_traces(textinfo='percent+label', pull=[0.05]*len(df))
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info(f"No data available for {title.lower()}.")


def movie_list(movies, value_key=None, value_label=""):
    """Compact ranked list of movie titles with an optional counter column"""
    if not movies:
        st.info("No movies yet.")
        return

    for i, m in enumerate(movies, start=1):
        col1, col2 = st.columns([4, 1])
        with col1:
            year = f" ({m['release_year']})" if m.get("release_year") else ""
            st.markdown(f"**{i}. {m.get('title', 'Untitled')}**{year}")
        with col2:
            if value_key:
                st.markdown(f"{(m.get(value_key) or 0):,} {value_label}")
