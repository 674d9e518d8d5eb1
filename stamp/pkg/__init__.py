"""Packages on disk, fetching their sources, and the store that installs them."""