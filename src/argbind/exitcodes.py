# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0
#
# Preferred system exit codes as defined by sysexits.h
#
# Exit code constants intended to be passed to `sys.exit()`
# after a command line was parsed with :class:`argbind.Cli`.

# Successful exit, including a short-circuited parse (e.g. --help)
OK = 0

# The command was used incorrectly, e.g., with the
# wrong number of arguments, a bad flag, a bad syntax
# in a parameter, etc.
USAGE = 64

# An internal software error has been detected. For
# argbind this means the parser configuration itself
# is invalid (a logic error), independent of the input.
SOFTWARE = 70
