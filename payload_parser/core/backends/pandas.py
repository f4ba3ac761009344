from typing import List, Dict, Any

import pandas as pd


class DataFrameBackend:
    def to_dataframe(self, records: List[Dict[str, Any]]) -> Any:
        raise NotImplementedError


class PandasBackend(DataFrameBackend):
    columns = ["variable", "value", "serie", "group", "unit", "metadata", "location"]

    def to_dataframe(self, records: List[Dict[str, Any]]) -> pd.DataFrame:
        df = pd.DataFrame(records)
        # keep the record attribute order, drop attributes no record carries
        ordered = [c for c in self.columns if c in df.columns]
        extra = [c for c in df.columns if c not in self.columns]
        return df[ordered + extra]
