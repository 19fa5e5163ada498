from prompt_toolkit.lexers import PygmentsLexer, SimpleLexer
from pygments.lexers import sql


simple_lexer = SimpleLexer()


class Lexer:

    _selected_lexer = None

    def __init__(self):
        self._selected_lexer = simple_lexer

    def lex_document(self, document):
        return self._selected_lexer.lex_document(document)

    def invalidation_hash(self):
        return id(self._selected_lexer)

    def set_selected(self, syntax):
        if syntax:
            self._selected_lexer = PygmentsLexer(sql.PostgresLexer)
        else:
            self._selected_lexer = simple_lexer


lexer = Lexer()
