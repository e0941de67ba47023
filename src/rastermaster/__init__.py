"""RasterMaster: raster surfacing toolpaths and G-code for flycutting."""
