from console import ConsoleGame, parse_move, render_board
from game import BLUE, RED, Move, empty_board


def scripted(*answers):
    it = iter(answers)
    return lambda prompt="": next(it)


def test_render_empty_board():
    expected = (
        " 0   1   2   \n"
        "0 . - . - .\n"
        "   \\ / \\ / \\\n"
        "  1 . - . - .\n"
        "     \\ / \\ / \\\n"
        "    2 . - . - .\n"
    )
    assert render_board(empty_board(3)) == expected


def test_render_stones(make_board):
    text = render_board(make_board(["B.", ".R"]))
    assert text.splitlines()[1] == "0 B - ."
    assert text.splitlines()[3] == "  1 . - R"


def test_render_single_cell():
    assert render_board([[RED]]) == " 0   \n0 R\n"


def test_parse_move():
    assert parse_move("0,1", 3) == Move(0, 1)
    assert parse_move(" 2 , 0 ", 3) == Move(2, 0)
    assert parse_move("3,0", 3) is None
    assert parse_move("-1,0", 3) is None
    assert parse_move("1;1", 3) is None
    assert parse_move("a,b", 3) is None
    assert parse_move("1,2,3", 3) is None
    assert parse_move("", 3) is None


def test_two_humans_play_to_a_win():
    out = []
    game = ConsoleGame(
        3,
        input_fn=scripted("Alice", "Bob", "1,0", "0,0", "1,1", "0,1", "1,2"),
        output_fn=out.append,
    )
    assert game.run() == BLUE
    assert out[-1] == "!!!Alice wins!!!"
    assert [p.name for p in game.players] == ["Alice", "Bob"]
    assert [p.color for p in game.players] == [BLUE, RED]


def test_invalid_moves_reprompt_and_exit_stops():
    out = []
    game = ConsoleGame(
        3,
        input_fn=scripted("Alice", "Bob", "0,0", "0,0", "x", "1,1", "exit"),
        output_fn=out.append,
    )
    assert game.run() is None
    assert sum("Invalid move" in line for line in out) == 2
    assert game.game.board[0][0] == BLUE
    assert game.game.board[1][1] == RED


def test_ai_players_finish_the_game():
    out = []
    game = ConsoleGame(2, sample_multiplier=2, seed=0, input_fn=scripted("AI", "AI"), output_fn=out.append)
    winner = game.run()
    assert all(p.ai for p in game.players)
    assert winner in (RED, BLUE)
    assert any("thinking" in line for line in out)


def closed_after(*answers):
    it = iter(answers)

    def read(prompt=""):
        for answer in it:
            return answer
        raise EOFError

    return read


def test_closed_input_while_naming_players_ends_quietly():
    game = ConsoleGame(3, input_fn=closed_after("Alice"), output_fn=lambda line: None)
    assert game.run() is None
    assert not game.setup_players()


def test_closed_input_during_play_ends_quietly():
    game = ConsoleGame(3, input_fn=closed_after("Alice", "Bob", "1,1"), output_fn=lambda line: None)
    assert game.run() is None
    assert game.game.board[1][1] == BLUE
