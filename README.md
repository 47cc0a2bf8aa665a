# corewar

Two command-line tools for the Core War game:

- **corewar-asm** turns a champion written in assembly (`.s`) into bytecode (`.cor`).
- **corewar** loads up to four `.cor` champions into a circular 4 KiB memory arena and runs them until no process is left.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Assembling a champion

```
corewar-asm champion.s
```

This writes `champion.cor` next to the source file and prints
`SUCCESS: bytecode successfully written to champion.cor`. A source file starts
with a `.name` line and a `.comment` line (in either order), followed by labels
and instructions:

```
.name "zork"
.comment "I'M ALIIIIVE"

l2:     sti r1, %:live, %1
        and r1, %0, r1
live:   live %1
        zjmp %:live
```

Comments start with `#` or `;`. A name may be at most 128 characters and a
comment at most 2048. Problems are printed to standard error and the command
exits with status 1: lexical errors, unexpected tokens, arguments of the wrong
type, undeclared labels and register numbers outside `r1`–`r16` are reported
with their row and column; a name or comment that is too long is reported
without one.

Run without arguments, with more than one argument, or with a file name that
does not end in `.s`, it prints a usage message and exits with status 1.

## Running a battle

```
corewar [-a] [-dump nbr_cycles] [-l log_level] [-n number] champion1.cor ...
```

- `-a` prints the output of the `aff` instruction (hidden by default).
- `-dump nbr_cycles` prints the arena as hex rows of 32 bytes once that many
  cycles have run, and stops without announcing a winner.
- `-l log_level` turns on logging; add values together to combine them:
  - `0`: essentials only
  - `1`: lives
  - `2`: cycles, changes of cycles-to-die and processes killed
  - `4`: operations
  - `16`: program counter movements (except jumps)
- `-n number` gives the next champion the number 1 to 4; champions without a
  number take the free numbers in order.

The machine introduces the contestants, runs them, and announces the last
player reported alive as the winner (or the last player, if none was).
A champion file with no code is dropped with a warning. With no champions,
more than four, an invalid `.cor` file or an argument it does not understand,
it reports the problem or prints the usage message and exits with status 1.

## Using it from Python

```python
from corewar.lexer import tokenize
from corewar.assembler import assemble
from corewar.asm_cli import build_bytecode
from corewar.player import parse_player

source = '.name "demo"\n.comment "just a demo"\nlive %1\n'
program = assemble(tokenize(source))
bytecode = build_bytecode(program)
player = parse_player(bytecode)
print(player.name, player.code_size)  # demo 5
```

A game can be set up and run without the command line:

```python
from corewar.state import VM
from corewar.vm import configure, run

vm = VM()
configure(vm, ["champion1.cor", "champion2.cor"])
vm.introduce()
if not run(vm):
    vm.announce_winner()
```

Assembler problems are raised as subclasses of `corewar.asm_errors.AsmError`;
everything the tools report as fatal derives from `corewar.common.CorewarError`.
`corewar.op` holds the instruction table (`get_op`, `op_by_code`), and
`corewar.memory` holds the helpers that read and write big-endian values in the
circular arena.

## What it does not do

There is no graphical or interactive view of the arena: the machine only
prints text logs and the `-dump` hex dump. The usage text mentions an `-s N`
option, but it is not accepted.