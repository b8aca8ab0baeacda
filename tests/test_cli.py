import pytest

from molseqkit.core.exceptions import ConfigurationError
from molseqkit.presentation.cli.convert import main, output_path, parse_options


@pytest.fixture
def fastq_file(tmp_path, fastq_text):
    path = tmp_path / "reads.fastq"
    path.write_text(fastq_text)
    return path


class TestCLI:
    """Tests for the command line entry point."""

    def test_single_input_to_stdout(self, fastq_file, capsys):
        assert main(["fastq-to-fasta", str(fastq_file)]) == 0
        assert capsys.readouterr().out == ">read1\nACGTACGT\n>read2 sample=2\nGGCC\n"

    def test_single_input_to_file(self, fastq_file, tmp_path):
        destination = tmp_path / "out" / "reads.fa"
        assert main(["fastq-to-fasta", str(fastq_file), "-o", str(destination)]) == 0
        assert destination.read_text().startswith(">read1\nACGTACGT")

    def test_options_are_passed(self, fastq_file, capsys):
        assert main(["fastq-to-fasta", str(fastq_file), "--option", "lineWidth=4"]) == 0
        assert capsys.readouterr().out.splitlines()[:3] == [">read1", "ACGT", "ACGT"]

    def test_batch_writes_one_file_per_input(self, tmp_path, fastq_text):
        inputs = []
        for name in ("a.fastq", "b.fastq"):
            path = tmp_path / name
            path.write_text(fastq_text)
            inputs.append(str(path))
        out_dir = tmp_path / "converted"
        assert main(["fastq-to-fasta", *inputs, "-o", str(out_dir)]) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["a.fasta", "b.fasta"]

    def test_failed_input_sets_exit_code(self, tmp_path, fastq_file):
        bad = tmp_path / "bad.fastq"
        bad.write_text("read1\nACGT\n+\nIIII\n")
        assert main(["fastq-to-fasta", str(fastq_file), str(bad), "-o", str(tmp_path / "out")]) == 1
        assert (tmp_path / "out" / "reads.fasta").exists()

    def test_missing_file(self, tmp_path):
        assert main(["fastq-to-fasta", str(tmp_path / "missing.fastq")]) == 1

    def test_unknown_option_exits(self, fastq_file):
        with pytest.raises(SystemExit) as excinfo:
            main(["fastq-to-fasta", str(fastq_file), "--option", "colour=red"])
        assert excinfo.value.code == 2

    def test_unknown_tool_exits(self, fastq_file):
        with pytest.raises(SystemExit):
            main(["fasta-to-png", str(fastq_file)])

    def test_seed_makes_output_reproducible(self, tmp_path, capsys):
        path = tmp_path / "protein.fasta"
        path.write_text(">p1\nMKWVTFISLLLLFSSAYS\n")
        args = ["protein-to-dna", str(path), "--seed", "7", "--option", "optimization_strategy=random"]
        main(args)
        first = capsys.readouterr().out
        main(args)
        assert capsys.readouterr().out == first
        assert first.startswith(">DNA_p1")


class TestHelpers:
    def test_parse_options(self):
        assert parse_options(["a=1", " b = two "]) == {"a": "1", "b": "two"}
        with pytest.raises(ConfigurationError):
            parse_options(["novalue"])

    def test_output_path(self, tmp_path):
        assert output_path("in.pdb", None, ".cif", batch=False) is None
        assert output_path("in.pdb", "x.cif", ".cif", batch=False).name == "x.cif"
        batch_path = output_path(str(tmp_path / "in.pdb"), None, ".cif", batch=True)
        assert batch_path == tmp_path / "in.cif"
