"""Application-level constants."""

SHELL_PROMPT = "prompt> "

SHELL_HELP = """\
Commands (quote multi-word terms, e.g. pick "best quality"):
  pick TERM...        select terms            unpick TERM...   deselect terms
  toggle TERM...      flip selection          terms [TEXT]     list matching terms
  group TERM TERM...  group selected terms    ungroup TERM...  move terms back to top level
  weight TERM VALUE   weight TERM's item      unweight TERM    drop that weight
  import TEXT         merge prompt text       show             print prompt and labels
  clear               start over              quit             leave
TERM may be a term id (e.g. 0-0-1), its output text or its display text."""
