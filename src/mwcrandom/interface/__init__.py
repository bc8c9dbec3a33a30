"""
==========
Interfaces
==========

``mwcrandom`` ships a small command line tool, :command:`mwc`, for drawing
values and checking the generator's output.

"""
