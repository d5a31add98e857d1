# Filesystem, editor, date and terminal helpers
