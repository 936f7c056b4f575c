"""Static command catalogs: host tools and the palette's own builtin commands."""

# (ref, name, description, shortcut)
TOOLS: list[tuple[str, str, str, str]] = [
    ("moveTool", "Move tool", "Moves a selection or layer.", "V"),
    ("artboardTool", "Artboard tool", "Creates, moves, or resizes multiple canvases.", "V"),
    ("marqueeRectTool", "Rectangular Marquee tool", "Makes a selection in the shape of a rectangle.", "M"),
    ("marqueeEllipTool", "Elliptical Marquee tool", "Make oval and circular selections.", "M"),
    ("marqueeSingleRowTool", "Single Row Marquee tool", "Makes a horizontal selection that's a single pixel high.", ""),
    ("marqueeSingleColumnTool", "Single Column Marquee tool", "Makes a vertical selection that's a single pixel wide.", ""),
    ("lassoTool", "Lasso tool", "Makes freehand selections.", "L"),
    ("polySelTool", "Polygonal Lasso tool", "Make selections by connecting straight lines.", "L"),
    ("magneticLassoTool", "Magnetic Lasso tool", "Make selections that snap to edges in an image as you drag.", "L"),
    ("quickSelectTool", "Quick Selection tool", "Makes a selection by finding and following the edges in an image.", "W"),
    ("magicWandTool", "Magic Wand tool", "Select an area based on its color.", "W"),
    ("cropTool", "Crop tool", "Trims or expands the edges of an image.", "C"),
    ("perspectiveCropTool", "Perspective Crop tool", "Crops an image to correct distortions caused by perspective.", "C"),
    ("sliceTool", "Slice tool", "Cuts an image into smaller sections suitable for web design.", "C"),
    ("sliceSelectTool", "Slice Select tool", "Selects, moves, and resizes slices of an image.", "C"),
    ("framedGroupTool", "Frame Tool", "Creates placeholder frames for images.", "K"),
    ("eyedropperTool", "Eyedropper tool", "Samples colors from an image.", "I"),
    ("colorSamplerTool", "Color Sampler tool", "Displays values for colors in an image.", "I"),
    ("rulerTool", "Ruler tool", "Measures distances and angles in an image.", "I"),
    ("textAnnotTool", "Note tool", "Creates text notes that you can attach to an image or file.", "I"),
    ("countTool", "Count tool", "Counts the number of objects in an image.", "I"),
    ("spotHealingBrushTool", "Spot Healing Brush tool", "Removes marks and blemishes.", "J"),
    ("magicStampTool", "Healing Brush tool", "Repair imperfections by painting with pixels from another part of the image.", "J"),
    ("patchSelection", "Patch tool", "Replace a selected area with pixels from another part of the image.", "J"),
    ("recomposeSelection", "Content-Aware Move tool", "Selects and moves part of an image and automatically fills the area left behind.", "J"),
    ("redEyeTool", "Red Eye tool", "Fixes the red-eye effect caused by a camera flash.", "J"),
    ("removeTool", "Remove tool", "Removes distractions by brushing over them.", "J"),
    ("paintbrushTool", "Brush tool", "Paints custom brush strokes.", "B"),
    ("pencilTool", "Pencil tool", "Paints hard-edged brush strokes.", "B"),
    ("colorReplacementBrushTool", "Color Replacement tool", "Paints the selected color over an existing color.", "B"),
    ("wetBrushTool", "Mixer Brush tool", "Simulates real painting techniques, such as blending colors.", "B"),
    ("cloneStampTool", "Clone Stamp tool", "Paints with pixels from another part of the image.", "S"),
    ("patternStampTool", "Pattern Stamp tool", "Paints using a chosen pattern.", "S"),
    ("historyBrushTool", "History Brush tool", "Paints a copy of a history state into the current window.", "Y"),
    ("artBrushTool", "Art History Brush tool", "Paints stylized strokes from a history state.", "Y"),
    ("eraserTool", "Eraser tool", "Erases pixels.", "E"),
    ("backgroundEraserTool", "Background Eraser tool", "Erases areas to transparency by dragging.", "E"),
    ("magicEraserTool", "Magic Eraser tool", "Erases solid-colored areas to transparency with a single click.", "E"),
    ("gradientTool", "Gradient tool", "Creates blends between colors.", "G"),
    ("bucketTool", "Paint Bucket tool", "Fills similarly colored areas with the foreground color.", "G"),
    ("blurTool", "Blur tool", "Blurs hard edges in an image.", ""),
    ("sharpenTool", "Sharpen tool", "Sharpens soft edges in an image.", ""),
    ("smudgeTool", "Smudge tool", "Smudges data in an image.", ""),
    ("dodgeTool", "Dodge tool", "Lightens areas in an image.", "O"),
    ("burnInTool", "Burn tool", "Darkens areas in an image.", "O"),
    ("saturationTool", "Sponge tool", "Changes the color saturation of an area.", "O"),
    ("penTool", "Pen tool", "Draws smooth-edged paths.", "P"),
    ("freeformPenTool", "Freeform Pen tool", "Draws paths as if drawing with a pen on paper.", "P"),
    ("curvaturePenTool", "Curvature Pen Tool", "Draws curves and straight segments intuitively.", "P"),
    ("addKnotTool", "Add Anchor Point tool", "Adds anchor points to a path.", ""),
    ("deleteKnotTool", "Delete Anchor Point tool", "Deletes anchor points from a path.", ""),
    ("convertKnotTool", "Convert Point tool", "Converts smooth points to corner points and back.", ""),
    ("typeCreateOrEditTool", "Horizontal Type tool", "Creates horizontal type on an image.", "T"),
    ("typeVerticalCreateOrEditTool", "Vertical Type tool", "Creates vertical type on an image.", "T"),
    ("typeCreateMaskTool", "Horizontal Type Mask tool", "Creates a horizontal selection in the shape of type.", "T"),
    ("typeVerticalCreateMaskTool", "Vertical Type Mask tool", "Creates a vertical selection in the shape of type.", "T"),
    ("pathComponentSelectTool", "Path Selection tool", "Makes shape or segment selections.", "A"),
    ("directSelectTool", "Direct Selection tool", "Selects anchor points and direction lines.", "A"),
    ("rectangleTool", "Rectangle Tool", "Draws rectangles.", "U"),
    ("ellipseTool", "Ellipse tool", "Draws ellipses.", "U"),
    ("triangleTool", "Triangle tool", "Draws triangles.", "U"),
    ("polygonTool", "Polygon tool", "Draws polygons.", "U"),
    ("lineTool", "Line tool", "Draws lines.", "U"),
    ("customShapeTool", "Custom Shape tool", "Draws custom shapes from a shape list.", "U"),
    ("handTool", "Hand tool", "Moves an image within its window.", "H"),
    ("rotateTool", "Rotate View tool", "Non-destructively rotates the canvas.", "R"),
    ("zoomTool", "Zoom tool", "Magnifies and reduces the view of an image.", "Z"),
]

# key -> (name, description)
BUILTINS: dict[str, tuple[str, str]] = {
    "about": ("About Command Palette", "Command Palette > About..."),
    "help": ("Plugin Help", "Command Palette > Plugin Help..."),
    "loadScripts": ("Load Script(s)...", "Command Palette > Load Script(s)..."),
    "loadFileBookmarks": ("Load File Bookmark(s)...", "Command Palette > Load File Bookmark(s)..."),
    "loadFolderBookmark": ("Load Folder Bookmark", "Command Palette > Load Folder Bookmark..."),
    "clearHistory": ("Clear History", "Command Palette > Clear History"),
    "openDataFolder": ("Open Plugin Data Folder", "Command Palette > Open Plugin Data Folder"),
    "reload": ("Reload Plugin Data", "Command Palette > Reload Plugin Data"),
}

# Menus skipped entirely while flattening the host menu bar
MENUS_TO_IGNORE = frozenset({"Open Recent"})

# Host menu items whose reported shortcut is missing or wrong
MENU_SHORTCUT_PATCHES: dict[int, dict[str, object]] = {
    5069: {"keyChar": "Q"},  # Edit in Quick Mask Mode
    5991: {"keyChar": "F"},  # Standard Screen Mode
    5992: {"keyChar": "F"},  # Full Screen Mode With Menu Bar
    5993: {"keyChar": "F"},  # Full Screen Mode
}
