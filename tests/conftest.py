"""Shared test fixtures for phagemap."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

from phagemap.aligners.base import Aligner
from phagemap.models.hits import HitRecord, NormalizedInterval


TEST_DATA_DIR = Path(__file__).parent / "test_data"


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default loguru sink after each test.

    CLI tests install a sink on CliRunner's temporary stderr.
    """
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def test_data_dir():
    """Path to test data directory."""
    return TEST_DATA_DIR


@pytest.fixture
def hits_tsv(test_data_dir):
    """Path to a small hit table spanning two contigs."""
    return test_data_dir / "hits.tsv"


@pytest.fixture
def small_genome_fasta(test_data_dir):
    """Path to a two-contig genome FASTA."""
    return test_data_dir / "small_genome.fasta"


@pytest.fixture
def genbank_genome(tmp_path):
    """A two-record GenBank file written with Biopython."""
    from Bio import SeqIO
    from Bio.Seq import Seq
    from Bio.SeqRecord import SeqRecord

    records = [
        SeqRecord(Seq("atgc" * 30), id="ctg1", name="ctg1", description="contig 1",
                  annotations={"molecule_type": "DNA"}),
        SeqRecord(Seq("ggcc" * 10), id="ctg2", name="ctg2", description="contig 2",
                  annotations={"molecule_type": "DNA"}),
    ]
    path = tmp_path / "genome.gbk"
    SeqIO.write(records, str(path), "genbank")
    return path


@pytest.fixture
def make_interval():
    """Factory for NormalizedInterval with sensible defaults."""

    def _make(chrom="ctg1", start0=0, end0=100, strand="+",
              subject_id="phrog_1", percent_identity=50.0):
        return NormalizedInterval(
            chrom=chrom,
            start0=start0,
            end0=end0,
            strand=strand,
            subject_id=subject_id,
            percent_identity=percent_identity,
        )

    return _make


@pytest.fixture
def sample_hits():
    """Hits matching tests/test_data/hits.tsv."""
    return [
        HitRecord("ctg2", 500, 1400, "phrog_12|portal", 61.2),
        HitRecord("ctg1", 101, 200, "phrog_1|terminase", 45.0),
        HitRecord("ctg1", 300, 251, "phrog_2|capsid", 72.5),
        HitRecord("ctg1", 5001, 5100, "phrog_3|integrase", 38.1),
        HitRecord("ctg2", 2000, 2600, "phrog_13|tail", 55.0),
        HitRecord("ctg2", 9000, 8700, "phrog_14|lysin", 90.0),
    ]


@pytest.fixture
def mock_aligner(hits_tsv):
    """Aligner that copies the test hit table instead of aligning."""
    aligner = MagicMock(spec=Aligner)
    aligner.name = "mock"
    aligner.required_tools.return_value = []

    def mock_run(query_fasta, output_file):
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(hits_tsv.read_text())
        return output_file

    def mock_align(query_fasta, output_file):
        from phagemap.io.hits import iter_hits

        path = mock_run(query_fasta, output_file)
        with open(path) as f:
            yield from iter_hits(f)

    aligner.run.side_effect = mock_run
    aligner.align.side_effect = mock_align
    return aligner


@pytest.fixture
def tmp_output(tmp_path):
    """Temporary output directory."""
    out = tmp_path / "output"
    out.mkdir()
    return out
