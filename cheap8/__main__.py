# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import sys

from cheap8.cli import main

sys.exit(main())
