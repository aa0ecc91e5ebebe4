import csv
import os

import main


def test_short_training_run(tmp_path, capsys):
    outdir = str(tmp_path / "run")
    sim = main.main(["--gens", "2", "--steps", "3", "--animals", "4",
                     "--foods", "6", "--seed", "1", "--outdir", outdir,
                     "--snapshot_interval", "1"])

    assert sim.generation == 2
    assert len(sim.history) == 2

    with open(os.path.join(outdir, "evolution_log.csv"), newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["generation"] for r in rows] == ["0", "1"]

    assert os.path.isfile(os.path.join(outdir, "snapshots", "gen_000000.png"))
    assert os.path.isfile(os.path.join(outdir, "brains", "gen_000001_best.png"))
    assert os.path.isfile(os.path.join(outdir, "charts", "fitness_final.png"))
    assert "Gen     1" in capsys.readouterr().out


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.steps == 2500
    assert args.animals == 40
    assert args.foods == 60
