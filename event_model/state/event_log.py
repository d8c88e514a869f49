# event_model/state/event_log.py
"""
Tabular views of simulation output and their on-disk persistence.

The engine produces plain record objects; this module turns them into pandas
DataFrames with fixed column order and dtypes, and writes them as Parquet
(with explicit Arrow schemas) or CSV.
"""

from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd
import pyarrow as pa  # Explicit Parquet schema handling
import pyarrow.parquet as pq

from event_model.schema.columns import (
    DAILY_COLS,
    EVENT_COLS,
    ROSTER_COLS,
    DailyColumns,
    EventColumns,
    RosterColumns,
)
from event_model.state.employee import Employee, EmployeeEvent, EventData
from logging_config import get_diagnostic_logger, get_logger

logger = get_logger(__name__)
diag_logger = get_diagnostic_logger(__name__)

# --- Schema Definitions ---

DAILY_PANDAS_DTYPES = {
    DailyColumns.DATE.value: "datetime64[ns]",
    DailyColumns.HIRES.value: "int64",
    DailyColumns.TERMINATIONS.value: "int64",
    DailyColumns.PROMOTIONS.value: "int64",
}

EVENT_PANDAS_DTYPES = {
    EventColumns.EVENT_DATE.value: "datetime64[ns]",
    EventColumns.EVENT_TYPE.value: pd.StringDtype(),
    EventColumns.EMP_ID.value: pd.StringDtype(),
}

ROSTER_PANDAS_DTYPES = {
    RosterColumns.EMP_ID.value: pd.StringDtype(),
    RosterColumns.EMP_HIRE_DATE.value: "datetime64[ns]",
    RosterColumns.EMP_TERM_DATE.value: "datetime64[ns]",
    RosterColumns.EMP_PROMOTION_DATES.value: "object",
    RosterColumns.EMP_GENDER.value: pd.StringDtype(),
    RosterColumns.EMP_ETHNICITY.value: pd.StringDtype(),
    RosterColumns.EMP_DEPARTMENT.value: pd.StringDtype(),
    RosterColumns.EMP_AGE.value: pd.Int64Dtype(),
    RosterColumns.EMP_ACTIVE.value: "bool",
}

DAILY_SCHEMA = pa.schema(
    [
        pa.field(DailyColumns.DATE.value, pa.timestamp("ns"), nullable=False),
        pa.field(DailyColumns.HIRES.value, pa.int64(), nullable=False),
        pa.field(DailyColumns.TERMINATIONS.value, pa.int64(), nullable=False),
        pa.field(DailyColumns.PROMOTIONS.value, pa.int64(), nullable=False),
    ]
)

EVENT_SCHEMA = pa.schema(
    [
        pa.field(EventColumns.EVENT_DATE.value, pa.timestamp("ns"), nullable=False),
        pa.field(EventColumns.EVENT_TYPE.value, pa.string(), nullable=False),
        pa.field(EventColumns.EMP_ID.value, pa.string(), nullable=False),
    ]
)

ROSTER_SCHEMA = pa.schema(
    [
        pa.field(RosterColumns.EMP_ID.value, pa.string(), nullable=False),
        pa.field(RosterColumns.EMP_HIRE_DATE.value, pa.timestamp("ns"), nullable=False),
        pa.field(RosterColumns.EMP_TERM_DATE.value, pa.timestamp("ns"), nullable=True),
        pa.field(RosterColumns.EMP_PROMOTION_DATES.value, pa.list_(pa.date32()), nullable=False),
        pa.field(RosterColumns.EMP_GENDER.value, pa.string(), nullable=True),
        pa.field(RosterColumns.EMP_ETHNICITY.value, pa.string(), nullable=True),
        pa.field(RosterColumns.EMP_DEPARTMENT.value, pa.string(), nullable=True),
        pa.field(RosterColumns.EMP_AGE.value, pa.int64(), nullable=True),
        pa.field(RosterColumns.EMP_ACTIVE.value, pa.bool_(), nullable=False),
    ]
)

# --- Core Functions ---


def _conform(df: pd.DataFrame, dtypes) -> pd.DataFrame:
    for col, dtype in dtypes.items():
        if dtype == "datetime64[ns]":
            df[col] = pd.to_datetime(df[col]).astype(dtype)
        else:
            df[col] = df[col].astype(dtype)
    return df


def _frame(rows, columns, dtypes) -> pd.DataFrame:
    return _conform(pd.DataFrame(rows, columns=columns), dtypes)


def daily_events_to_frame(daily_events: Iterable[EventData]) -> pd.DataFrame:
    rows = [(d.date, d.hires, d.terminations, d.promotions) for d in daily_events]
    return _frame(rows, DAILY_COLS, DAILY_PANDAS_DTYPES)


def employee_events_to_frame(events: Iterable[EmployeeEvent]) -> pd.DataFrame:
    rows = [(e.date, e.type.value, e.employee_id) for e in events]
    return _frame(rows, EVENT_COLS, EVENT_PANDAS_DTYPES)


def roster_to_frame(employees: Iterable[Employee]) -> pd.DataFrame:
    """
    One row per employee, terminated members included.

    promotion_dates holds a list of dates per row; termination_date is NaT
    for employees still active.
    """
    rows = [
        (
            emp.id,
            emp.hire_date,
            emp.termination_date,
            list(emp.promotion_dates),
            emp.gender,
            emp.ethnicity,
            emp.department,
            emp.age,
            emp.is_active,
        )
        for emp in employees
    ]
    return _frame(rows, ROSTER_COLS, ROSTER_PANDAS_DTYPES)


def result_frames(result) -> Dict[str, pd.DataFrame]:
    """Return the three output tables of a SimulationResult keyed by file stem."""
    return {
        "daily_events": daily_events_to_frame(result.daily_events),
        "employee_events": employee_events_to_frame(result.employee_events),
        "employees": roster_to_frame(result.employees),
    }


_SCHEMAS = {
    "daily_events": DAILY_SCHEMA,
    "employee_events": EVENT_SCHEMA,
    "employees": ROSTER_SCHEMA,
}


def save_frame(df: pd.DataFrame, path: Path, schema: pa.Schema) -> None:
    """
    Saves a DataFrame to a Parquet file using an explicit Arrow schema.

    Args:
        df: The DataFrame to save.
        path: Output Parquet file.
        schema: Arrow schema the table must conform to.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, schema=schema, preserve_index=False)
    diag_logger.debug(f"Saving {len(df)} rows to: {path}")
    pq.write_table(
        table,
        path,
        compression="snappy",
        use_dictionary=True,  # event_type and demographic columns are low-cardinality
        write_statistics=True,
    )


def save_results(result, output_dir: Union[str, Path], fmt: str = "parquet") -> Dict[str, Path]:
    """
    Write daily_events, employee_events and employees tables to output_dir.

    Args:
        result: A SimulationResult.
        output_dir: Destination directory (created if needed).
        fmt: 'parquet' or 'csv'.

    Returns:
        Mapping of table name to the file written.
    """
    if fmt not in ("parquet", "csv"):
        raise ValueError(f"Unsupported output format '{fmt}'; use 'parquet' or 'csv'")
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, df in result_frames(result).items():
        path = output_dir / f"{name}.{fmt}"
        try:
            if fmt == "parquet":
                save_frame(df, path, _SCHEMAS[name])
            else:
                if name == "employees":
                    df = df.assign(
                        **{
                            RosterColumns.EMP_PROMOTION_DATES.value: df[
                                RosterColumns.EMP_PROMOTION_DATES.value
                            ].map(lambda ds: ";".join(d.isoformat() for d in ds))
                        }
                    )
                df.to_csv(path, index=False, date_format="%Y-%m-%d")
        except Exception as e:
            logger.error(f"Error saving {name} to {path}: {e}", exc_info=True)
            raise
        written[name] = path
    logger.info(f"Saved {len(written)} tables to {output_dir}")
    return written


def load_frame(path: Union[str, Path]) -> pd.DataFrame:
    """Load a table written by save_results, restoring the matching dtypes."""
    path = Path(path)
    dtypes = {
        "daily_events": DAILY_PANDAS_DTYPES,
        "employee_events": EVENT_PANDAS_DTYPES,
        "employees": ROSTER_PANDAS_DTYPES,
    }.get(path.stem)
    if path.suffix == ".parquet":
        df = pq.read_table(path, schema=_SCHEMAS.get(path.stem)).to_pandas()
    else:
        df = pd.read_csv(path)
    if dtypes:
        if path.suffix == ".csv" and path.stem == "employees":
            df[RosterColumns.EMP_PROMOTION_DATES.value] = (
                df[RosterColumns.EMP_PROMOTION_DATES.value]
                .fillna("")
                .map(lambda s: [pd.Timestamp(x).date() for x in s.split(";") if x])
            )
        df = _conform(df, dtypes)
    return df
