# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock

import pandas as pd

from bubble_data.client import BubbleDataClient
from bubble_data.models.page import PageResult
from bubble_data.utils._pandas import dataframe_to_records


class TestDataFrameHelpers(unittest.TestCase):
    """Tests for DataFrame conveniences on BubbleDataClient."""

    def setUp(self):
        self.client = BubbleDataClient("https://yourapp.bubbleapps.io/api/1.1", "key")
        self.client._api = MagicMock()

    def test_list_things_dataframe(self):
        self.client._api._list.return_value = PageResult(
            results=[{"_id": "a", "title": "A"}, {"_id": "b", "title": "B", "views": 3}]
        )

        df = self.client.list_things_dataframe("Article")

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 2)
        self.assertListEqual(df["title"].tolist(), ["A", "B"])
        self.assertTrue(pd.isna(df.iloc[0]["views"]))
        self.client._api._list.assert_called_once_with("Article", (), limit=100, cursor=0, fetch_all=True)

    def test_list_things_dataframe_empty(self):
        self.client._api._list.return_value = PageResult()
        df = self.client.list_things_dataframe("Article")
        self.assertTrue(df.empty)

    def test_create_bulk_things_dataframe(self):
        df = pd.DataFrame({"title": ["A", "B"], "views": [1, float("nan")]})
        self.client._api._create_bulk.return_value = [{"id": "1"}, {"id": "2"}]

        out = self.client.create_bulk_things_dataframe("Article", df)

        self.assertEqual(out, [{"id": "1"}, {"id": "2"}])
        sent = self.client._api._create_bulk.call_args.args[1]
        self.assertEqual(sent, [{"title": "A", "views": 1.0}, {"title": "B"}])

    def test_create_bulk_things_dataframe_rejects_non_dataframe(self):
        with self.assertRaises(TypeError):
            self.client.create_bulk_things_dataframe("Article", [{"title": "A"}])


class TestDataframeToRecords(unittest.TestCase):
    def test_na_as_null(self):
        df = pd.DataFrame({"title": ["A", None]})
        self.assertEqual(dataframe_to_records(df, na_as_null=True), [{"title": "A"}, {"title": None}])

    def test_timestamps_become_iso_strings(self):
        df = pd.DataFrame({"published": [pd.Timestamp("2024-01-02T03:04:05")]})
        self.assertEqual(dataframe_to_records(df), [{"published": "2024-01-02T03:04:05"}])

    def test_values_are_json_native(self):
        df = pd.DataFrame({"views": [3]})
        (record,) = dataframe_to_records(df)
        self.assertIs(type(record["views"]), int)


if __name__ == "__main__":
    unittest.main()
