import numpy as np
from matplotlib import colors
from matplotlib import cm
from matplotlib.collections import PolyCollection
import mpl_toolkits.mplot3d as a3


def _mapped_colors(c, cmap, axes=None, showcolorbar=False):
    if isinstance(c, np.ndarray) and np.isrealobj(c):
        norm = colors.Normalize(vmin=c.min(), vmax=c.max())
        mapper = cm.ScalarMappable(norm=norm, cmap=cmap)
        mapper.set_array(c)
        if showcolorbar:
            f = axes.get_figure()
            f.colorbar(mapper, shrink=0.5, ax=axes)
        return mapper.to_rgba(c)
    return c


def show_mesh_2d(
        axes, mesh,
        edgecolor='k', cellcolor='grey', aspect='equal',
        linewidths=1, showaxis=False, showcolorbar=False, cmap='gnuplot2'):
    """Draw a triangle mesh, cells colored by `cellcolor`, which may be an
    array of cell values."""
    axes.set_aspect(aspect)
    if showaxis is False:
        axes.set_axis_off()
    else:
        axes.set_axis_on()

    cellcolor = _mapped_colors(cellcolor, cmap, axes, showcolorbar)

    node = mesh.entity('node')
    cell = mesh.entity('cell')
    poly = PolyCollection(node[cell, :])
    poly.set_edgecolor(edgecolor)
    poly.set_linewidth(linewidths)
    poly.set_facecolors(cellcolor)

    box = np.zeros(4, dtype=np.float64)
    box[0::2] = np.min(node, axis=0)
    box[1::2] = np.max(node, axis=0)
    axes.set_xlim(box[0:2])
    axes.set_ylim(box[2:4])
    return axes.add_collection(poly)


def show_mesh_3d(
        axes, mesh,
        edgecolor='k', facecolor='w',
        linewidths=0.5, showaxis=False, alpha=0.8):
    """Draw the boundary faces of a tetrahedron mesh."""
    if showaxis is False:
        axes.set_axis_off()
    else:
        axes.set_axis_on()

    node = mesh.entity('node')
    face = mesh.entity('face', index=mesh.boundary_face_index())
    faces = a3.art3d.Poly3DCollection(
            node[face],
            facecolor=facecolor,
            linewidths=linewidths,
            edgecolor=edgecolor,
            alpha=alpha)
    h = axes.add_collection3d(faces)
    axes.set_xlim(node[:, 0].min(), node[:, 0].max())
    axes.set_ylim(node[:, 1].min(), node[:, 1].max())
    axes.set_zlim(node[:, 2].min(), node[:, 2].max())
    return h
