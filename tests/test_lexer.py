import unittest

from bytetape import Instruction, UnbalancedLoop, build_jump_table, lex, tokenize
from bytetape.errors import StructuralError


class TokenizeTests(unittest.TestCase):
    def test_maps_every_symbol(self) -> None:
        self.assertEqual(
            tokenize("><+-.,[]"),
            (
                Instruction.MOVE_RIGHT,
                Instruction.MOVE_LEFT,
                Instruction.INCREMENT,
                Instruction.DECREMENT,
                Instruction.OUTPUT,
                Instruction.INPUT,
                Instruction.LOOP_OPEN,
                Instruction.LOOP_CLOSE,
            ),
        )

    def test_comments_do_not_shift_positions(self) -> None:
        program = lex("add two: ++\n loop [ - ] done")
        self.assertEqual(program.to_source(), "++[-]")
        self.assertEqual(dict(program.jump_table), {2: 4, 4: 2})

    def test_from_symbol_rejects_comment_characters(self) -> None:
        self.assertIs(Instruction.from_symbol("["), Instruction.LOOP_OPEN)
        self.assertIsNone(Instruction.from_symbol("a"))


class JumpTableTests(unittest.TestCase):
    def test_nested_loops_are_paired(self) -> None:
        table = build_jump_table(tokenize("[[]][]"))
        self.assertEqual(dict(table), {0: 3, 3: 0, 1: 2, 2: 1, 4: 5, 5: 4})

    def test_table_is_symmetric(self) -> None:
        for source in ("", "+", "[]", "[[[]]]", "+[->[+<]>]>[.]", "[][][[]][]"):
            with self.subTest(source=source):
                table = lex(source).jump_table
                for position, target in table.items():
                    self.assertEqual(table[target], position)

    def test_only_loop_positions_are_keys(self) -> None:
        program = lex("+[>.]-")
        loop_positions = {
            index
            for index, instruction in enumerate(program.instructions)
            if instruction in (Instruction.LOOP_OPEN, Instruction.LOOP_CLOSE)
        }
        self.assertEqual(set(program.jump_table), loop_positions)

    def test_jump_table_is_read_only(self) -> None:
        table = lex("[]").jump_table
        with self.assertRaises(TypeError):
            table[0] = 5  # type: ignore[index]


class UnbalancedLoopTests(unittest.TestCase):
    def test_lone_close(self) -> None:
        with self.assertRaises(UnbalancedLoop) as ctx:
            lex("+]")
        self.assertEqual(ctx.exception.symbol, "]")
        self.assertEqual(ctx.exception.position, 1)
        self.assertIn("Unmatched ']'", str(ctx.exception))

    def test_lone_open(self) -> None:
        with self.assertRaises(UnbalancedLoop) as ctx:
            lex("[[]")
        self.assertEqual(ctx.exception.symbol, "[")
        self.assertEqual(ctx.exception.position, 0)

    def test_close_before_open(self) -> None:
        with self.assertRaises(StructuralError):
            lex("][")


if __name__ == "__main__":
    unittest.main()
