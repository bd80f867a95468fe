"""Recursive-descent parser for Lox. Consumes a token list and produces a list of statements.

The grammar, from lowest to highest precedence:

```
program     ::= declaration* EOF
declaration ::= "fun" function | "var" IDENTIFIER ("=" expression)? ";" | statement
function    ::= IDENTIFIER "(" (IDENTIFIER ("," IDENTIFIER)*)? ")" block
statement   ::= "if" "(" expression ")" statement ("else" statement)?   ; else binds to the nearest if
              | "while" "(" expression ")" statement
              | "for" "(" (varDecl | exprStmt | ";") expression? ";" expression? ")" statement
              | "print" expression ";"
              | "return" expression? ";"
              | block
              | expression ";"
block       ::= "{" declaration* "}"

expression  ::= assignment
assignment  ::= IDENTIFIER "=" assignment | logic_or
logic_or    ::= logic_and ("or" logic_and)*
logic_and   ::= equality ("and" equality)*
equality    ::= comparison (("!=" | "==") comparison)*
comparison  ::= term ((">" | ">=" | "<" | "<=") term)*
term        ::= factor (("-" | "+") factor)*
factor      ::= unary (("/" | "*") unary)*
unary       ::= ("!" | "-") unary | call
call        ::= primary ("(" arguments? ")")*
primary     ::= "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER | "(" expression ")"
```

`for` loops have no node of their own: they are desugared into a Block holding the initializer and a While.

Errors are collected in Parser.errors. After an error the parser synchronizes to the next statement boundary and keeps
going, so that several independent errors can be reported from one source.
"""

from lox.lang.error import LoxSyntaxError
from lox.syntax import nodes
from lox.syntax.tokens import TokenType


class ParseError(Exception):
    """Unwinds the parser to the enclosing declaration. The error itself is already recorded in Parser.errors."""


class Parser:
    MAX_ARGS = 255
    BOUNDARIES = {
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
        TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
    }

    def __init__(self, tokens):
        self._tokens = tokens
        self._current = 0
        self._function_depth = 0  # for rejecting top-level returns

        self.errors = []

    def parse(self):
        """Parses declarations until EOF. Declarations that failed to parse are left out of the result."""
        statements = []
        while not self._at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # ==================== DECLARATIONS ====================

    def _declaration(self):
        try:
            if self._match(TokenType.FUN):
                return self._function()
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError:
            self._synchronize()
            return None
        except RecursionError:
            # the host stack ran out before the nesting did
            self._error(self._peek(), "Expression nesting too deep.")
            self._synchronize()
            return None

    def _function(self):
        name = self._consume(TokenType.IDENTIFIER, "Expect function name.")
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after function name.")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= Parser.MAX_ARGS:
                    self._error(self._peek(), f"Can't have more than {Parser.MAX_ARGS} parameters.")
                params.append(self._consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")

        self._consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
        self._function_depth += 1
        try:
            body = self._block()
        finally:
            self._function_depth -= 1

        return nodes.Function(name, tuple(params), tuple(body))

    def _var_declaration(self):
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    # ==================== STATEMENTS ====================

    def _statement(self):
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        if self._match(TokenType.LEFT_BRACE):
            return nodes.Block(tuple(self._block()))
        return self._expression_statement()

    def _if_statement(self):
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = self._statement() if self._match(TokenType.ELSE) else None

        return nodes.If(condition, then_branch, else_branch)

    def _while_statement(self):
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")

        return nodes.While(condition, self._statement())

    def _for_statement(self):
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = nodes.Block((body, nodes.Expression(increment)))
        if condition is None:
            condition = nodes.Literal(True)
        body = nodes.While(condition, body)
        if initializer is not None:
            body = nodes.Block((initializer, body))

        return body

    def _print_statement(self):
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return nodes.Print(value)

    def _return_statement(self):
        keyword = self._previous()
        if self._function_depth == 0:
            self._error(keyword, "Can't return from top-level code.")

        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return nodes.Return(keyword, value)

    def _expression_statement(self):
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return nodes.Expression(expr)

    def _block(self):
        """Parses the declarations of a block whose "{" has already been consumed."""
        statements = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # ==================== EXPRESSIONS ====================

    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)

            self._error(equals, "Invalid assignment target.")  # reported, but no need to synchronize

        return expr

    def _or(self):
        expr = self._and()
        while self._match(TokenType.OR):
            operator = self._previous()
            expr = nodes.Logical(expr, operator, self._and())
        return expr

    def _and(self):
        expr = self._equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            expr = nodes.Logical(expr, operator, self._equality())
        return expr

    def _binary(self, operand, *types):
        """Left-associative chain of operand separated by any of types."""
        expr = operand()
        while self._match(*types):
            operator = self._previous()
            expr = nodes.Binary(expr, operator, operand())
        return expr

    def _equality(self):
        return self._binary(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary(
            self._term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)

    def _term(self):
        return self._binary(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self):
        return self._binary(self._unary, TokenType.SLASH, TokenType.STAR)

    def _unary(self):
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            return nodes.Unary(operator, self._unary())
        return self._call()

    def _call(self):
        expr = self._primary()
        while self._match(TokenType.LEFT_PAREN):
            expr = self._finish_call(expr)
        return expr

    def _finish_call(self, callee):
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= Parser.MAX_ARGS:
                    self._error(self._peek(), f"Can't have more than {Parser.MAX_ARGS} arguments.")
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break

        paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return nodes.Call(callee, paren, tuple(arguments))

    def _primary(self):
        if self._match(TokenType.FALSE):
            return nodes.Literal(False)
        if self._match(TokenType.TRUE):
            return nodes.Literal(True)
        if self._match(TokenType.NIL):
            return nodes.Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return nodes.Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # ==================== HELPERS ====================

    def _match(self, *types):
        """Consumes the current token if it is any of types."""
        for typ in types:
            if self._check(typ):
                self._advance()
                return True
        return False

    def _consume(self, typ, message):
        if self._check(typ):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, typ):
        if self._at_end():
            return False
        return self._peek().type is typ

    def _advance(self):
        if not self._at_end():
            self._current += 1
        return self._previous()

    def _at_end(self):
        return self._peek().type is TokenType.EOF

    def _peek(self):
        return self._tokens[self._current]

    def _previous(self):
        return self._tokens[self._current - 1]

    def _error(self, token, message):
        """Records an error at token. Returns (does not raise) a ParseError so callers decide whether to unwind."""
        self.errors.append(LoxSyntaxError.at_token(token, message))
        return ParseError(message)

    def _synchronize(self):
        """Discards tokens until just after a ";" or just before a token that starts a new statement."""
        self._advance()

        while not self._at_end():
            if self._previous().type is TokenType.SEMICOLON:
                return
            if self._peek().type in Parser.BOUNDARIES:
                return
            self._advance()
