"""Tests for the CSV map record repository."""

import pytest

from flowfinder.adapters.records import CSVMapRecordRepository
from flowfinder.config import DataConfig
from flowfinder.domain import Link, RecordLoadError


def _write(path, text):
    path.write_text(text.strip() + "\n", encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path):
    _write(
        tmp_path / "nodes.csv",
        """
id,name,x,y,congestion,point_of_interest_id
1,Gate,0,0,0,
2,Wheel,10,0,2,1
3,,5,5,,
""",
    )
    _write(
        tmp_path / "links.csv",
        """
id,from_node_id,to_node_id,distance,weight,is_directed
1,1,2,10,,false
2,2,3,5,7.5,TRUE

""",
    )
    _write(
        tmp_path / "points_of_interest.csv",
        """
id,name,node_id,x,y,current_occupancy,max_capacity,is_open
1,Wheel,2,10,0,8,10,
2,Kiosk,,3,3,0,5,no
""",
    )
    return tmp_path


class TestCSVMapRecordRepository:
    def test_snapshot_reads_all_records(self, data_dir):
        snapshot = CSVMapRecordRepository(DataConfig(data_dir=data_dir)).snapshot()

        assert [node.id for node in snapshot.nodes] == [1, 2, 3]
        assert snapshot.nodes[1].point_of_interest_id == 1
        assert snapshot.nodes[2].name == "Node 3"
        assert snapshot.links == (
            Link(id=1, from_node_id=1, to_node_id=2, distance=10.0),
            Link(id=2, from_node_id=2, to_node_id=3, distance=5.0, weight=7.5, is_directed=True),
        )
        wheel, kiosk = snapshot.points_of_interest
        assert wheel.node_id == 2 and wheel.current_occupancy == 8 and wheel.is_open
        assert kiosk.node_id is None and not kiosk.is_open

    def test_missing_points_of_interest_file_is_allowed(self, data_dir):
        (data_dir / "points_of_interest.csv").unlink()

        snapshot = CSVMapRecordRepository(DataConfig(data_dir=data_dir)).snapshot()

        assert snapshot.points_of_interest == ()

    def test_missing_links_file_raises(self, data_dir):
        (data_dir / "links.csv").unlink()

        with pytest.raises(RecordLoadError) as exc_info:
            CSVMapRecordRepository(DataConfig(data_dir=data_dir)).snapshot()

        assert exc_info.value.file_path.endswith("links.csv")

    @pytest.mark.parametrize(
        "row",
        ["3,1,2,-4,,false", "3,1,x,4,,false", "3,1,2,4,,maybe", "3,1,2"],
    )
    def test_malformed_link_reports_line(self, data_dir, row):
        with (data_dir / "links.csv").open("a", encoding="utf-8") as f:
            f.write(row + "\n")

        with pytest.raises(RecordLoadError) as exc_info:
            CSVMapRecordRepository(DataConfig(data_dir=data_dir)).snapshot()

        assert exc_info.value.line == 4
        assert exc_info.value.cause is not None

    def test_files_are_reread_on_each_snapshot(self, data_dir):
        repo = CSVMapRecordRepository(DataConfig(data_dir=data_dir))
        assert len(repo.snapshot().links) == 2

        with (data_dir / "links.csv").open("a", encoding="utf-8") as f:
            f.write("3,3,1,2,,true\n")

        assert len(repo.snapshot().links) == 3

    def test_bundled_sample_map_loads(self):
        snapshot = CSVMapRecordRepository(DataConfig()).snapshot()

        assert len(snapshot.nodes) >= 2
        assert snapshot.links
