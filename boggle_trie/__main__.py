import sys

from boggle_trie.cli import main

sys.exit(main())
