"""Autoplay example: a scripted player runs a short timed session.

The player answers each problem with its reference solution, fumbling
every fourth attempt with a single wrong gate to show how a miss breaks
the combo. The countdown runs on the asyncio event loop with a shortened
tick so the whole session finishes in about a second.
"""

from __future__ import annotations

import asyncio

from qgategame import GameConfig
from qgategame.game import GameDifficulty, GameEngine, GameState, ScoreRepository, seed_rng
from qgategame.logging import configure_logging
from qgategame.quantum import ALL_GATES


def _wrong_gate(engine: GameEngine):
    for gate in ALL_GATES:
        engine.add_gate(gate)
        solved = engine.check_current_state()
        engine.clear_circuit()
        if not solved:
            return gate
    return None


async def play(difficulty: GameDifficulty, seed: int) -> GameEngine:
    """Play one session to the end and return the finished engine."""
    engine = GameEngine(
        config=GameConfig(duration=20, tick_seconds=0.05),
        rng=seed_rng(seed),
    )
    engine.subscribe(
        lambda event, eng: print(f"  [{eng.state.value}] final score {eng.score}")
        if event == "state" and eng.state is GameState.FINISHED
        else None
    )
    engine.start(difficulty)

    attempt = 0
    while engine.state is GameState.PLAYING:
        attempt += 1
        problem = engine.current_problem
        if attempt % 4 == 0:
            gate = _wrong_gate(engine)
            if gate is not None:
                engine.add_gate(gate)
        else:
            for gate in problem.reference_solution:
                engine.add_gate(gate)

        print(f"  {engine.current_circuit.to_text_diagram()}  fidelity={engine.current_fidelity:.3f}")
        correct, _ = engine.run_circuit()
        if not correct:
            engine.clear_circuit()
        print(
            f"  {'solved' if correct else 'missed'}: score={engine.score} "
            f"combo={engine.combo_count} bonus={engine.last_combo_bonus}"
        )
        await asyncio.sleep(0.06)

    return engine


def main() -> None:
    configure_logging(level="WARNING")
    repository = ScoreRepository()

    for difficulty in GameDifficulty:
        print(f"{difficulty.display_name}: {difficulty.description}")
        engine = asyncio.run(play(difficulty, seed=0))
        rank = repository.save_score(engine.final_score_entry)
        print(f"  ranked #{rank}, {engine.problems_solved} problems solved\n")

    best = {d.value: repository.high_score(d) for d in GameDifficulty}
    print(f"Session complete. High scores: {best}")


if __name__ == "__main__":
    main()
